import json
from collections.abc import Generator

import httpx
import pytest

from doc_capture.backend.http_client_adapter import HttpBackendClientAdapter
from doc_capture.config.settings import Settings


class RecordingBackend:
    """Stand-in /api/process endpoint served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.bodies: list[dict[str, object]] = []
        self.status_code = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path != "/api/process":
            return httpx.Response(404, text="not found")
        self.bodies.append(json.loads(request.content))
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="processing error")
        return httpx.Response(200, json={"ProcessingFinished": 1, "ContainerList": {"List": []}})


@pytest.fixture
def test_settings() -> Settings:
    return Settings(backend_base_url="http://reader.test")


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def http_backend(
    test_settings: Settings, recording_backend: RecordingBackend
) -> Generator[HttpBackendClientAdapter, None, None]:
    client = HttpBackendClientAdapter(
        base_url=test_settings.backend_base_url,
        timeout_seconds=test_settings.backend_timeout_seconds,
        scenario=test_settings.process_scenario,
        light=test_settings.page_light,
        transport=httpx.MockTransport(recording_backend),
    )
    try:
        yield client
    finally:
        client.close()
