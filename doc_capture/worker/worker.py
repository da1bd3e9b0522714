import json
from collections.abc import Iterable

from doc_capture.events.handler import CaptureEventHandler
from doc_capture.events.models import DeviceEvent
from doc_capture.logging.logger import Log


class EventStreamWorker:
    """Read loop: line -> event -> handler, one event at a time."""

    def __init__(self, handler: CaptureEventHandler) -> None:
        self._handler = handler

    def run(self, stream: Iterable[str], max_events: int | None = None) -> int:
        """Dispatch newline-delimited JSON events until the stream ends.

        If max_events is set, stop after handling that many events (for testing).
        Returns the number of events handled.
        """
        Log.info("Worker started, reading device events")
        handled = 0
        try:
            for line_no, line in enumerate(stream, start=1):
                if max_events is not None and handled >= max_events:
                    break
                event = self._parse(line, line_no)
                if event is None:
                    continue
                self._dispatch(event)
                handled += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info(f"Worker stopped after {handled} event(s)")
        return handled

    def _parse(self, line: str, line_no: int) -> DeviceEvent | None:
        text = line.strip()
        if not text:
            return None
        try:
            detail = json.loads(text)
        except json.JSONDecodeError as exc:
            Log.warning(f"Skipping malformed event on line {line_no}: {exc}")
            return None
        return DeviceEvent.from_detail(detail)

    def _dispatch(self, event: DeviceEvent) -> None:
        """Handle one event; unexpected errors are logged and the loop goes on."""
        try:
            result = self._handler.handle(event)
        except Exception as exc:
            Log.exception(f"Event {event.action or '<no action>'} failed: {exc}")
            return
        Log.debug(f"Event {event.action or '<no action>'} -> {result.outcome.value}")
