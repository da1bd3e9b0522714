from abc import ABC, abstractmethod

from doc_capture.logging.logger import Log


class BaseCaptureScreen(ABC):
    """Contract for the capture UI driven by the event handler."""

    @abstractmethod
    def open(self) -> None:
        """Show the capture screen."""

    @abstractmethod
    def close(self) -> None:
        """Hide the capture screen."""

    @abstractmethod
    def notify(self, message: str) -> None:
        """Show a message to the user."""


class LoggingCaptureScreen(BaseCaptureScreen):
    """Headless screen that writes UI requests to the log."""

    def __init__(self) -> None:
        self.is_open = False

    def open(self) -> None:
        self.is_open = True
        Log.info("Capture screen opened")

    def close(self) -> None:
        self.is_open = False
        Log.info("Capture screen closed")

    def notify(self, message: str) -> None:
        Log.info(f"User notice: {message}")
