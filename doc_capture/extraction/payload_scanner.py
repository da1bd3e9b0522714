"""Schema-agnostic search for image payloads inside device event graphs."""

from collections.abc import Callable, Mapping, Sequence

from doc_capture.images.encoding import is_byte_buffer, is_data_uri, looks_like_base64
from doc_capture.images.models import EncodedImage, ImageCandidate
from doc_capture.images.normalizer import ImageNormalizer
from doc_capture.logging.logger import Log

# Keys seen carrying image payloads across SDK builds. Checked before the
# generic walk so their values pick up the owning mapping's media type.
IMAGE_KEYS = (
    "image",
    "Image",
    "imageBytes",
    "bytes",
    "data",
    "buffer",
    "previewImage",
    "originalImage",
    "OriginalImage",
    "uncropped",
    "full",
    "cropped",
    "front",
    "back",
)
MEDIA_TYPE_KEYS = ("mime", "contentType")

TextPredicate = Callable[[str], bool]


class PayloadScanner:
    """Walks an arbitrary JSON-like value and collects image-looking values.

    The walk is an explicit depth-first stack with an identity-keyed visited
    set, so shared or cyclic references are entered once. Results follow
    document order and each source occurrence is reported at most once.
    Malformed payloads never raise: whatever was found before the failure
    is returned.
    """

    def __init__(
        self,
        normalizer: ImageNormalizer,
        *,
        min_base64_length: int = 5000,
        max_candidates: int = 4000,
    ) -> None:
        self._normalizer = normalizer
        self._min_base64_length = min_base64_length
        self._max_candidates = max_candidates

    def scan(self, root: object) -> list[EncodedImage]:
        """Return every image found under ``root`` in canonical form."""
        return self._normalizer.normalize_all(self.scan_candidates(root))

    def scan_candidates(
        self,
        root: object,
        accept: TextPredicate | None = None,
    ) -> list[ImageCandidate]:
        """Return raw candidates found under ``root``.

        Args:
            root: Any event payload.
            accept: Optional predicate replacing the default string test.
        """
        found: list[ImageCandidate] = []
        try:
            self._walk(root, accept or self.is_candidate_text, found)
        except Exception as exc:
            Log.warning(f"Payload scan stopped after {len(found)} candidate(s): {exc!r}")
        return found

    def is_candidate_text(self, value: str) -> bool:
        return is_data_uri(value) or looks_like_base64(value, self._min_base64_length)

    def _walk(
        self,
        root: object,
        accept: TextPredicate,
        found: list[ImageCandidate],
    ) -> None:
        visited: set[int] = set()
        stack: list[tuple[object, str | None]] = [(root, None)]
        while stack and len(found) < self._max_candidates:
            node, hint = stack.pop()
            if isinstance(node, str):
                if accept(node):
                    found.append(ImageCandidate(node, hint))
                continue
            if is_byte_buffer(node):
                found.append(ImageCandidate(node, hint))  # type: ignore[arg-type]
                continue
            if not isinstance(node, (Mapping, Sequence)):
                continue
            if id(node) in visited:
                continue
            visited.add(id(node))
            if isinstance(node, Mapping):
                children = self._visit_mapping(node, accept, found)
            else:
                children = [(item, None) for item in node]
            stack.extend(reversed(children))

    def _visit_mapping(
        self,
        node: Mapping[object, object],
        accept: TextPredicate,
        found: list[ImageCandidate],
    ) -> list[tuple[object, str | None]]:
        hint = _media_type_hint(node)
        consumed: set[str] = set()
        for key in IMAGE_KEYS:
            value = node.get(key)
            if isinstance(value, str) and accept(value):
                found.append(ImageCandidate(value, hint))
                consumed.add(key)
            elif is_byte_buffer(value):
                found.append(ImageCandidate(value, hint))  # type: ignore[arg-type]
                consumed.add(key)
        return [(value, None) for key, value in node.items() if key not in consumed]


def _media_type_hint(node: Mapping[object, object]) -> str | None:
    for key in MEDIA_TYPE_KEYS:
        value = node.get(key)
        if isinstance(value, str) and value.startswith("image/"):
            return value
    return None
