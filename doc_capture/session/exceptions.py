class CaptureError(Exception):
    """Base exception for capture-session errors."""


class RecoverableCaptureError(CaptureError):
    """The user can retake the current pass; the session keeps its phase."""


class ExtractionFailure(RecoverableCaptureError):
    """Raised when a finished pass yields no usable image."""


class AmbiguousPages(RecoverableCaptureError):
    """Raised when no back page distinct from the stored front can be found."""


class SubmissionInProgress(RecoverableCaptureError):
    """Raised when a pass finishes while a submission is still pending."""
