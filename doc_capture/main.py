import sys

from doc_capture.backend.factory import BackendClientFactory
from doc_capture.config.settings import Settings
from doc_capture.events.handler import build_event_handler
from doc_capture.logging.logger import Log
from doc_capture.worker.worker import EventStreamWorker


def main() -> None:
    """Entry point: settings -> backend client -> handler -> read events from stdin."""
    settings = Settings()
    Log.configure(settings.log_level)
    backend = BackendClientFactory.create(settings)

    try:
        handler = build_event_handler(settings, backend)
        handler.open_screen()
        worker = EventStreamWorker(handler)
        worker.run(sys.stdin)
    finally:
        backend.close()


if __name__ == "__main__":
    main()
