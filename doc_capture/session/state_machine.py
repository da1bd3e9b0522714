"""Front/back capture protocol as pure transitions over ``CaptureSession``."""

from collections.abc import Iterable
from dataclasses import replace

from doc_capture.images.models import EncodedImage
from doc_capture.logging.logger import Log
from doc_capture.session.exceptions import AmbiguousPages, ExtractionFailure, SubmissionInProgress
from doc_capture.session.models import (
    CaptureSession,
    Decision,
    DecisionKind,
    PageList,
    ScanBuffer,
    SessionState,
)


class CaptureSessionStateMachine:
    """Decides, per finished pass, whether to submit or ask for the back side.

    Every method takes the current session and returns a new one; nothing is
    mutated in place.
    """

    def __init__(self, duplicate_length_tolerance: int = 50) -> None:
        self._tolerance = duplicate_length_tolerance

    def open(self, session: CaptureSession) -> CaptureSession:
        """Start a fresh session for a newly opened capture screen."""
        Log.debug(f"Session {session.generation + 1}: opened")
        return CaptureSession(
            state=SessionState.AWAITING_FIRST_PASS,
            generation=session.generation + 1,
        )

    def collect(self, session: CaptureSession, images: Iterable[EncodedImage]) -> CaptureSession:
        return replace(session, scan_buffer=session.scan_buffer.extend(images))

    def attach_container_list(
        self,
        session: CaptureSession,
        container_list: object,
    ) -> CaptureSession:
        """Keep the first container list of the pass; later ones are ignored."""
        if session.container_list is not None or container_list is None:
            return session
        return replace(session, container_list=container_list)

    def end_pass(self, session: CaptureSession) -> CaptureSession:
        """Drop pass-scoped data once a finished event has been taken."""
        return replace(session, container_list=None)

    def on_pass_finished(
        self,
        session: CaptureSession,
        pages: Iterable[EncodedImage],
    ) -> Decision:
        """Apply one finished pass.

        Raises:
            SubmissionInProgress: a submission for this session is pending.
            ExtractionFailure: ``pages`` is empty.
            AmbiguousPages: waiting for the back side but every page repeats the front.
        """
        if session.state is SessionState.SUBMITTING:
            raise SubmissionInProgress("A submission is already in progress")
        unique = list(ScanBuffer().extend(pages))
        if not unique:
            raise ExtractionFailure("No document pages could be extracted")

        if session.awaiting_back and session.front_page is not None:
            back = self._pick_back(session.front_page, unique)
            if back is None:
                raise AmbiguousPages("Back side matches the front; capture the back again")
            return self._submit(session, session.front_page, back)

        if len(unique) >= 2:
            front = unique[0]
            back = self._pick_back(front, unique)
            return self._submit(session, front, unique[1] if back is None else back)

        Log.info(f"Session {session.generation}: front captured, waiting for the back side")
        return Decision(
            kind=DecisionKind.REQUEST_SECOND_PASS,
            session=replace(
                session,
                state=SessionState.AWAITING_SECOND_PASS,
                front_page=unique[0],
                awaiting_back=True,
                scan_buffer=ScanBuffer(),
                container_list=None,
            ),
        )

    def complete(self, session: CaptureSession) -> CaptureSession:
        Log.debug(f"Session {session.generation}: {SessionState.DONE.value} -> idle")
        return CaptureSession(generation=session.generation)

    def fail(self, session: CaptureSession) -> CaptureSession:
        Log.debug(f"Session {session.generation}: {SessionState.FAILED.value} -> idle")
        return CaptureSession(generation=session.generation)

    def cancel(self, session: CaptureSession) -> CaptureSession:
        Log.debug(f"Session {session.generation}: cancelled")
        return CaptureSession(generation=session.generation + 1)

    def is_same_capture(self, first: EncodedImage, second: EncodedImage) -> bool:
        """True when ``second`` is ``first`` re-reported, by content or by near-equal length."""
        return first == second or abs(len(first) - len(second)) < self._tolerance

    def _pick_back(self, front: EncodedImage, pages: list[EncodedImage]) -> EncodedImage | None:
        candidate = pages[-1]
        if not self.is_same_capture(front, candidate):
            return candidate
        return next((page for page in pages if page != front), None)

    def _submit(
        self,
        session: CaptureSession,
        front: EncodedImage,
        back: EncodedImage,
    ) -> Decision:
        Log.info(
            f"Session {session.generation}: submitting front ({len(front)} chars) "
            f"and back ({len(back)} chars)"
        )
        return Decision(
            kind=DecisionKind.SUBMIT,
            session=replace(session, state=SessionState.SUBMITTING),
            page_list=PageList.from_images([front, back]),
        )
