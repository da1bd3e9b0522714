import httpx

from doc_capture.backend.base import BaseBackendClient
from doc_capture.backend.exceptions import BackendError, TransportError
from doc_capture.backend.payload import PROCESS_PATH, build_process_request
from doc_capture.logging.logger import Log
from doc_capture.session.models import PageList


class HttpBackendClientAdapter(BaseBackendClient):
    """Backend client posting page lists over HTTP with httpx."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int,
        scenario: str = "FullProcess",
        light: int = 6,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + PROCESS_PATH
        self._scenario = scenario
        self._light = light
        self._client = httpx.Client(timeout=timeout_seconds, transport=transport)

    def submit(self, page_list: PageList) -> object:
        body = build_process_request(page_list, scenario=self._scenario, light=self._light)
        Log.info(f"POST {self._url} with {len(page_list)} page(s)")
        try:
            response = self._client.post(self._url, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"Backend request failed: {exc}") from exc

        Log.info(f"Backend responded {response.status_code}")
        if not response.is_success:
            raise BackendError(response.status_code, response.text)
        try:
            return response.json()
        except ValueError:
            return response.text

    def close(self) -> None:
        self._client.close()
