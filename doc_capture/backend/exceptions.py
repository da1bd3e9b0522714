class BackendClientError(Exception):
    """Raised when a page list could not be processed by the backend."""


class TransportError(BackendClientError):
    """Raised when the request could not be completed (connection, timeout)."""


class BackendError(BackendClientError):
    """Raised when the backend answers with a non-success status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Backend responded with HTTP {status}: {body}")
        self.status = status
        self.body = body
