from abc import ABC, abstractmethod

from doc_capture.session.models import PageList


class BaseBackendClient(ABC):
    """Contract for backend processing clients."""

    @abstractmethod
    def submit(self, page_list: PageList) -> object:
        """Send one page list for processing.

        Performs exactly one outbound call and never retries.

        Returns:
            The parsed JSON response, or the raw body when it is not JSON.

        Raises:
            TransportError: the call could not be completed.
            BackendError: the backend answered with a non-2xx status.
        """

    def close(self) -> None:
        """Release network resources. No-op by default."""
