from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from doc_capture.extraction.lookup import first_present


class EventAction(str, Enum):
    """Device actions the handler reacts to. Other actions are only scanned."""

    NEW_PAGE_AVAILABLE = "NEW_PAGE_AVAILABLE"
    NEW_PAGE_STARTED = "NEW_PAGE_STARTED"
    NEW_PAGE_COMPLETED = "NEW_PAGE_COMPLETED"
    PROCESS_FINISHED = "PROCESS_FINISHED"
    CLOSE = "CLOSE"


@dataclass(frozen=True)
class DeviceEvent:
    """One event from the capture device.

    ``detail`` is the whole event as delivered and is what gets scanned;
    ``data`` is its free-form payload.
    """

    action: str
    data: object = None
    detail: object = None

    @classmethod
    def from_detail(cls, detail: object) -> "DeviceEvent":
        if not isinstance(detail, Mapping):
            return cls(action="", data=None, detail=detail)
        action = detail.get("action")
        return cls(
            action="" if action is None else str(action),
            data=detail.get("data"),
            detail=detail,
        )

    @property
    def status(self) -> object:
        if not isinstance(self.data, Mapping):
            return None
        return self.data.get("status")

    @property
    def failure_reason(self) -> str:
        reason = first_present(self.data, ("reason",), ("message",))
        return reason if isinstance(reason, str) else ""


class Outcome(str, Enum):
    COLLECTED = "collected"
    SUBMITTED = "submitted"
    SECOND_PASS_REQUESTED = "second_pass_requested"
    EXTRACTION_FAILED = "extraction_failed"
    AMBIGUOUS_PAGES = "ambiguous_pages"
    CAPTURE_UNSUCCESSFUL = "capture_unsuccessful"
    SUBMISSION_FAILED = "submission_failed"
    DUPLICATE_SKIPPED = "duplicate_skipped"
    BUSY = "busy"
    CLOSED = "closed"
    STALE = "stale"


@dataclass(frozen=True)
class HandlerResult:
    outcome: Outcome
    message: str = ""
    response: object = None
    reopen_requested: bool = False
