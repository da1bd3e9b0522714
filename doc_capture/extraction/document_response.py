"""Reads front/back pages from the structured processing-result schema."""

from collections.abc import Mapping

from doc_capture.extraction.lookup import dig, first_int, first_present
from doc_capture.images.encoding import is_byte_buffer, is_recoverable_image_text
from doc_capture.images.models import EncodedImage
from doc_capture.images.normalizer import ImageNormalizer
from doc_capture.logging.logger import Log

# Result-type code of document images in the SDK's results map.
DOCUMENT_IMAGE_RESULT = 5

_RESPONSE_ROOTS = ("lowLvlResponse", "rawResponse")


class DocumentResponseReader:
    """Collects pages keyed by page index from a PROCESS_FINISHED response.

    The first image seen for an index wins. Only pages 0 and 1 are returned.
    """

    def __init__(self, normalizer: ImageNormalizer, *, min_base64_length: int = 5000) -> None:
        self._normalizer = normalizer
        self._min_base64_length = min_base64_length

    def read(self, response: object) -> list[EncodedImage]:
        if not isinstance(response, Mapping):
            return []
        pages: dict[int, EncodedImage] = {}
        try:
            self._read_document_images(response, pages)
            self._read_raw_images(response, pages)
            self._read_containers(response, pages)
        except Exception as exc:
            Log.warning(f"Document response could not be read: {exc!r}")
        return [pages[idx] for idx in (0, 1) if idx in pages]

    def _read_document_images(
        self, response: Mapping[object, object], pages: dict[int, EncodedImage]
    ) -> None:
        result = first_present(
            response,
            ("results", "documentImage"),
            ("results", "DOCUMENT_IMAGE"),
            ("results", DOCUMENT_IMAGE_RESULT),
            ("results", str(DOCUMENT_IMAGE_RESULT)),
            ("DocumentImage",),
        )
        if result is None:
            return
        items = first_present(result, ("pageList",), ("List",), ("pages",))
        if items is None:
            items = result
        if not isinstance(items, list):
            return
        for position, item in enumerate(items):
            value = first_present(item, ("image",), ("ImageData", "image"), ("data",))
            page_idx = first_int(item, ("pageIdx",), ("ImageData", "page_idx"))
            self._push(
                pages,
                item if value is None else value,
                position if page_idx is None else page_idx,
            )

    def _read_raw_images(
        self, response: Mapping[object, object], pages: dict[int, EncodedImage]
    ) -> None:
        sources = [response.get("rawImages")]
        sources += [dig(response, root, "RawImageContainerList", "Images") for root in _RESPONSE_ROOTS]
        for source in sources:
            if not isinstance(source, list):
                continue
            for position, item in enumerate(source):
                value = first_present(
                    item, ("data",), ("image",), ("ImageData", "image"), ("Value",)
                )
                page_idx = first_int(item, ("pageIdx",), ("ImageData", "page_idx"))
                self._push(pages, value, position if page_idx is None else page_idx)

    def _read_containers(
        self, response: Mapping[object, object], pages: dict[int, EncodedImage]
    ) -> None:
        containers = first_present(
            response,
            *[(root, "ContainerList", "List") for root in _RESPONSE_ROOTS],
        )
        if not isinstance(containers, list):
            return
        for container in containers:
            images = dig(container, "Images", "List")
            if not isinstance(images, list):
                continue
            for position, item in enumerate(images):
                value = first_present(item, ("ImageData", "image"), ("image",), ("data",))
                page_idx = first_int(item, ("ImageData", "page_idx"), ("pageIdx",))
                self._push(pages, value, position if page_idx is None else page_idx)

    def _push(self, pages: dict[int, EncodedImage], value: object, page_idx: int) -> None:
        if not (is_recoverable_image_text(value, self._min_base64_length) or is_byte_buffer(value)):
            return
        image = self._normalizer.normalize(value)
        if image is not None and page_idx not in pages:
            pages[page_idx] = image
