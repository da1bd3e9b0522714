from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from doc_capture.images.models import EncodedImage


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_FIRST_PASS = "awaiting_first_pass"
    AWAITING_SECOND_PASS = "awaiting_second_pass"
    SUBMITTING = "submitting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ScanBuffer:
    """Ordered, duplicate-free images collected during a session."""

    images: tuple[EncodedImage, ...] = ()

    def extend(self, images: Iterable[EncodedImage]) -> "ScanBuffer":
        """Return a buffer with the unseen ``images`` appended in order."""
        merged = list(self.images)
        seen = set(merged)
        for image in images:
            if image not in seen:
                seen.add(image)
                merged.append(image)
        return ScanBuffer(tuple(merged))

    def head(self, limit: int) -> list[EncodedImage]:
        return list(self.images[:limit])

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[EncodedImage]:
        return iter(self.images)


@dataclass(frozen=True)
class Page:
    image: EncodedImage
    page_idx: int


@dataclass(frozen=True)
class PageList:
    """Pages to submit, in order. Index 0 is the front, 1 the back."""

    pages: tuple[Page, ...] = ()

    @classmethod
    def from_images(cls, images: Iterable[EncodedImage]) -> "PageList":
        return cls(tuple(Page(image=image, page_idx=idx) for idx, image in enumerate(images)))

    @property
    def images(self) -> list[EncodedImage]:
        return [page.image for page in self.pages]

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)


@dataclass(frozen=True)
class CaptureSession:
    """State of one capture interaction, replaced on every transition.

    ``generation`` changes whenever a session is opened or cancelled, so a
    submission started under an older generation can be recognised as stale.
    ``container_list`` is the first container list seen in the current pass.
    """

    state: SessionState = SessionState.IDLE
    front_page: EncodedImage | None = None
    awaiting_back: bool = False
    scan_buffer: ScanBuffer = field(default_factory=ScanBuffer)
    generation: int = 0
    container_list: object = None


@dataclass(frozen=True)
class SubmissionRecord:
    signature: str = ""
    sent: bool = False


class DecisionKind(str, Enum):
    SUBMIT = "submit"
    REQUEST_SECOND_PASS = "request_second_pass"


@dataclass(frozen=True)
class Decision:
    """Outcome of feeding one finished pass to the state machine."""

    kind: DecisionKind
    session: CaptureSession
    page_list: PageList | None = None
