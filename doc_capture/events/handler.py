"""Entry point for device events: collection, pass decisions and submission."""

from doc_capture.backend.base import BaseBackendClient
from doc_capture.backend.exceptions import BackendClientError
from doc_capture.config.settings import Settings
from doc_capture.events.models import DeviceEvent, EventAction, HandlerResult, Outcome
from doc_capture.events.screen import BaseCaptureScreen, LoggingCaptureScreen
from doc_capture.extraction import (
    ContainerListAdapter,
    DocumentResponseReader,
    PayloadScanner,
    find_container_list,
)
from doc_capture.extraction.lookup import dig
from doc_capture.images.models import EncodedImage
from doc_capture.images.normalizer import ImageNormalizer
from doc_capture.logging.logger import Log
from doc_capture.session.exceptions import AmbiguousPages, ExtractionFailure, SubmissionInProgress
from doc_capture.session.models import CaptureSession, DecisionKind, PageList
from doc_capture.session.state_machine import CaptureSessionStateMachine
from doc_capture.session.submission_gate import SubmissionGate

# data.status values the device reports for a completed capture.
SUCCESS_STATUSES = (1, 2)


class CaptureEventHandler:
    """Runs each device event to completion against the current session.

    Every event except CLOSE is scanned into the session buffer. On
    PROCESS_FINISHED the pass pages are taken from the structured response,
    then from the buffer, then from the first container list seen during
    that pass, and fed to the state machine. A submission started under one session is ignored on
    return if the session was closed or reopened meanwhile.
    """

    def __init__(
        self,
        *,
        scanner: PayloadScanner,
        document_reader: DocumentResponseReader,
        container_adapter: ContainerListAdapter,
        state_machine: CaptureSessionStateMachine,
        gate: SubmissionGate,
        backend: BaseBackendClient,
        screen: BaseCaptureScreen,
        max_buffered_pages: int = 4,
    ) -> None:
        self._scanner = scanner
        self._document_reader = document_reader
        self._container_adapter = container_adapter
        self._machine = state_machine
        self._gate = gate
        self._backend = backend
        self._screen = screen
        self._max_buffered_pages = max_buffered_pages
        self._session = CaptureSession()
        self._submitting = False

    @property
    def session(self) -> CaptureSession:
        return self._session

    def open_screen(self) -> None:
        """Start a new capture session and show the scanner."""
        self._session = self._machine.open(self._session)
        self._gate.reset()
        self._screen.open()
        Log.info(f"Session {self._session.generation} started")

    def handle(self, event: DeviceEvent) -> HandlerResult:
        Log.debug(f"Device event {event.action or '<no action>'}")
        if event.action == EventAction.CLOSE:
            return self._close()

        self._collect(event)
        if event.action != EventAction.PROCESS_FINISHED:
            return HandlerResult(Outcome.COLLECTED)
        if self._submitting:
            Log.warning("Pass finished while a submission is pending; ignoring it")
            return HandlerResult(Outcome.BUSY, "A submission is already in progress")
        return self._finish_pass(event)

    def _close(self) -> HandlerResult:
        self._session = self._machine.cancel(self._session)
        self._gate.reset()
        self._screen.close()
        Log.info("Capture screen closed by the user, session reset")
        return HandlerResult(Outcome.CLOSED)

    def _collect(self, event: DeviceEvent) -> None:
        if self._session.container_list is None:
            container_list = find_container_list(event.detail)
            if container_list is not None:
                Log.info("Container list detected in device event")
                self._session = self._machine.attach_container_list(
                    self._session, container_list
                )

        images = self._scanner.scan(event.detail)
        if not images:
            return
        before = len(self._session.scan_buffer)
        self._session = self._machine.collect(self._session, images)
        added = len(self._session.scan_buffer) - before
        if added:
            Log.info(
                f"{event.action}: +{added} image(s), "
                f"buffer holds {len(self._session.scan_buffer)}"
            )

    def _finish_pass(self, event: DeviceEvent) -> HandlerResult:
        container_list = self._session.container_list
        self._session = self._machine.end_pass(self._session)

        status = event.status
        if status is not None and status not in SUCCESS_STATUSES:
            reason = event.failure_reason or "capture was not successful"
            return self._report(Outcome.CAPTURE_UNSUCCESSFUL, f"Capture failed: {reason}")

        pages = self._pages_for_pass(event, container_list)
        try:
            decision = self._machine.on_pass_finished(self._session, pages)
        except ExtractionFailure as exc:
            return self._report(Outcome.EXTRACTION_FAILED, f"{exc}. Please capture again.")
        except AmbiguousPages as exc:
            return self._report(Outcome.AMBIGUOUS_PAGES, str(exc))
        except SubmissionInProgress as exc:
            return HandlerResult(Outcome.BUSY, str(exc))

        self._session = decision.session
        if decision.kind is DecisionKind.REQUEST_SECOND_PASS:
            self._screen.close()
            self._screen.open()
            return self._report(
                Outcome.SECOND_PASS_REQUESTED,
                "Turn the document over and capture the back side",
                reopen_requested=True,
            )
        if decision.page_list is None:
            raise ValueError("Submit decision must carry a page list")
        return self._submit(decision.page_list)

    def _pages_for_pass(self, event: DeviceEvent, container_list: object) -> list[EncodedImage]:
        pages = self._document_reader.read(dig(event.data, "response"))
        source = "document response"
        if not pages:
            pages = self._session.scan_buffer.head(self._max_buffered_pages)
            source = "event buffer"
        if not pages and container_list is not None:
            pages = self._container_adapter.adapt(container_list).images
            source = "container list"
        Log.info(f"Pass finished with {len(pages)} page(s) from {source}")
        return pages

    def _submit(self, page_list: PageList) -> HandlerResult:
        if not self._gate.try_enter(page_list):
            self._session = self._machine.complete(self._session)
            return HandlerResult(Outcome.DUPLICATE_SKIPPED, "These pages were already submitted")

        generation = self._session.generation
        self._submitting = True
        try:
            response = self._backend.submit(page_list)
        except BackendClientError as exc:
            return self._submission_failed(exc, generation)
        except Exception:
            if generation == self._session.generation:
                self._session = self._machine.fail(self._session)
                self._gate.reset()
            raise
        finally:
            self._submitting = False

        if generation != self._session.generation:
            Log.info(f"Discarding response for closed session {generation}")
            return HandlerResult(Outcome.STALE, response=response)
        self._session = self._machine.complete(self._session)
        self._screen.close()
        return self._report(
            Outcome.SUBMITTED,
            f"Document processed ({len(page_list)} pages)",
            response=response,
        )

    def _submission_failed(self, exc: BackendClientError, generation: int) -> HandlerResult:
        if generation != self._session.generation:
            Log.info(f"Discarding failure for closed session {generation}: {exc}")
            return HandlerResult(Outcome.STALE)
        Log.error(f"Submission failed: {exc}")
        self._session = self._machine.fail(self._session)
        self._gate.reset()
        return self._report(Outcome.SUBMISSION_FAILED, f"Document processing failed: {exc}")

    def _report(
        self,
        outcome: Outcome,
        message: str,
        *,
        response: object = None,
        reopen_requested: bool = False,
    ) -> HandlerResult:
        Log.info(f"{outcome.value}: {message}")
        self._screen.notify(message)
        return HandlerResult(
            outcome,
            message,
            response=response,
            reopen_requested=reopen_requested,
        )


def build_event_handler(
    settings: Settings,
    backend: BaseBackendClient,
    screen: BaseCaptureScreen | None = None,
) -> CaptureEventHandler:
    """Build a CaptureEventHandler with all collaborators configured from settings."""
    normalizer = ImageNormalizer(default_media_type=settings.default_media_type)
    scanner = PayloadScanner(
        normalizer,
        min_base64_length=settings.scan_min_base64_length,
        max_candidates=settings.scan_max_candidates,
    )
    return CaptureEventHandler(
        scanner=scanner,
        document_reader=DocumentResponseReader(
            normalizer, min_base64_length=settings.scan_min_base64_length
        ),
        container_adapter=ContainerListAdapter(
            scanner, normalizer, min_base64_length=settings.scan_min_base64_length
        ),
        state_machine=CaptureSessionStateMachine(settings.duplicate_length_tolerance),
        gate=SubmissionGate(),
        backend=backend,
        screen=screen if screen is not None else LoggingCaptureScreen(),
        max_buffered_pages=settings.max_buffered_pages,
    )
