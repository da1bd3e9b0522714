import json

import httpx
import pytest

from doc_capture.backend.exceptions import BackendError, TransportError
from doc_capture.backend.http_client_adapter import HttpBackendClientAdapter
from doc_capture.images.models import EncodedImage
from doc_capture.session.models import PageList


def _make_adapter(handler, base_url: str = "http://backend:8080/"):  # type: ignore[no-untyped-def]
    return HttpBackendClientAdapter(
        base_url=base_url,
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture()
def page_list(front_image: EncodedImage, back_image: EncodedImage) -> PageList:
    return PageList.from_images([front_image, back_image])


class TestSuccessfulSubmit:
    def test_posts_json_to_process_endpoint(self, page_list: PageList, front_b64: str) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        result = _make_adapter(handler).submit(page_list)

        assert result == {"ok": True}
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://backend:8080/api/process"
        assert request.headers["content-type"] == "application/json"
        body = json.loads(request.content)
        assert body["List"][0]["ImageData"]["image"] == front_b64
        assert [item["ImageData"]["page_idx"] for item in body["List"]] == [0, 1]

    def test_returns_text_for_non_json_body(self, page_list: PageList) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(200, text="accepted"))
        assert adapter.submit(page_list) == "accepted"


class TestFailures:
    def test_non_2xx_raises_backend_error(self, page_list: PageList) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(422, text="bad pages"))
        with pytest.raises(BackendError) as exc_info:
            adapter.submit(page_list)
        assert exc_info.value.status == 422
        assert exc_info.value.body == "bad pages"

    def test_connection_error_raises_transport_error(self, page_list: PageList) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError, match="refused"):
            _make_adapter(handler).submit(page_list)

    def test_timeout_raises_transport_error(self, page_list: PageList) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(TransportError):
            _make_adapter(handler).submit(page_list)

    def test_no_retry_on_failure(self, page_list: PageList) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(500, text="boom")

        with pytest.raises(BackendError):
            _make_adapter(handler).submit(page_list)
        assert len(calls) == 1
