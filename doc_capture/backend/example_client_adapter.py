"""Offline backend client.

Makes no network calls. Useful for local runs against recorded device
events and as the reference for new backend adapters: implement
BaseBackendClient and register the provider in BackendClientFactory.
"""

from typing import ClassVar

from doc_capture.backend.base import BaseBackendClient
from doc_capture.backend.payload import build_process_request
from doc_capture.logging.logger import Log
from doc_capture.session.models import PageList


class ExampleBackendClientAdapter(BaseBackendClient):
    """Records each request body and answers with a fixed response."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {"ProcessingFinished": 1, "ContainerList": {}}

    def __init__(self, scenario: str = "FullProcess", light: int = 6) -> None:
        self._scenario = scenario
        self._light = light
        self.requests: list[dict[str, object]] = []

    def submit(self, page_list: PageList) -> object:
        body = build_process_request(page_list, scenario=self._scenario, light=self._light)
        self.requests.append(body)
        Log.info(f"Example backend accepted {len(page_list)} page(s)")
        return dict(self.DEFAULT_RESPONSE)
