import pytest

from doc_capture.extraction.container_list_adapter import ContainerListAdapter
from doc_capture.extraction.payload_scanner import PayloadScanner
from doc_capture.images.normalizer import ImageNormalizer


def _jpeg(length: int) -> str:
    """Base64 text with a JPEG signature, padded to ``length`` characters."""
    return "/9j/" + "A" * (length - 4)


@pytest.fixture()
def adapter(normalizer: ImageNormalizer) -> ContainerListAdapter:
    scanner = PayloadScanner(normalizer, min_base64_length=5000)
    return ContainerListAdapter(scanner, normalizer, min_base64_length=5000)


class TestRootShapes:
    def test_accepts_plain_list(self, adapter: ContainerListAdapter) -> None:
        pages = adapter.adapt([{"image": _jpeg(200)}])
        assert len(pages) == 1

    @pytest.mark.parametrize("key", ["List", "list", "Images"])
    def test_accepts_wrapped_list(self, adapter: ContainerListAdapter, key: str) -> None:
        pages = adapter.adapt({key: [{"image": _jpeg(200)}]})
        assert len(pages) == 1

    def test_unknown_shape_yields_empty(self, adapter: ContainerListAdapter) -> None:
        assert len(adapter.adapt({"Other": []})) == 0
        assert len(adapter.adapt("nope")) == 0
        assert len(adapter.adapt(None)) == 0


class TestEntrySelection:
    def test_image_data_field_wins(self, adapter: ContainerListAdapter) -> None:
        entry = {"ImageData": {"image": _jpeg(150)}, "image": _jpeg(900)}
        pages = adapter.adapt([entry])
        assert len(pages.pages[0].image) == 150

    def test_image_data_base64_subfield(self, adapter: ContainerListAdapter) -> None:
        pages = adapter.adapt([{"ImageData": {"Base64": _jpeg(300)}}])
        assert len(pages.pages[0].image) == 300

    def test_longest_direct_field_wins(self, adapter: ContainerListAdapter) -> None:
        entry = {"image": _jpeg(200), "Value": _jpeg(400), "data": _jpeg(300)}
        pages = adapter.adapt([entry])
        assert len(pages.pages[0].image) == 400

    def test_falls_back_to_longest_scanned_value(self, adapter: ContainerListAdapter) -> None:
        entry = {"meta": {"thumb": _jpeg(120), "nested": [{"raw": _jpeg(700)}]}}
        pages = adapter.adapt([entry])
        assert len(pages.pages[0].image) == 700

    def test_data_uri_prefix_is_kept_out_of_payload(self, adapter: ContainerListAdapter) -> None:
        uri = "data:image/png;base64," + _jpeg(200)
        pages = adapter.adapt([{"image": uri}])
        assert pages.pages[0].image.payload == _jpeg(200)


class TestPageIndices:
    def test_skipped_entries_leave_no_gaps(self, adapter: ContainerListAdapter) -> None:
        entries = [
            {"image": _jpeg(200), "data": _jpeg(500)},
            {"image": "too-short"},
            "not an entry",
            {"Image": _jpeg(300)},
        ]
        pages = adapter.adapt(entries)
        assert [page.page_idx for page in pages] == [0, 1]
        assert [len(page.image) for page in pages] == [500, 300]

    def test_short_unsigned_text_is_not_an_image(self, adapter: ContainerListAdapter) -> None:
        assert len(adapter.adapt([{"value": "QUJDREVG"}])) == 0
