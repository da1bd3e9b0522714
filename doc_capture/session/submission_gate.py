import hashlib

from doc_capture.logging.logger import Log
from doc_capture.session.models import PageList, SubmissionRecord


def page_list_signature(page_list: PageList) -> str:
    """SHA-256 over page count, then each page's index and base64 payload."""
    digest = hashlib.sha256(str(len(page_list)).encode("ascii"))
    for page in page_list:
        digest.update(f"|{page.page_idx}:".encode("ascii"))
        digest.update(page.image.payload.encode("utf-8"))
    return digest.hexdigest()


class SubmissionGate:
    """Allows one backend call per distinct page list until reset."""

    def __init__(self) -> None:
        self._record = SubmissionRecord()

    @property
    def record(self) -> SubmissionRecord:
        return self._record

    def try_enter(self, page_list: PageList) -> bool:
        """Record ``page_list`` as sent; False if it was the last one sent."""
        signature = page_list_signature(page_list)
        if self._record.sent and self._record.signature == signature:
            Log.warning(f"Skipping duplicate submission {signature[:12]}")
            return False
        self._record = SubmissionRecord(signature=signature, sent=True)
        return True

    def reset(self) -> None:
        self._record = SubmissionRecord()
