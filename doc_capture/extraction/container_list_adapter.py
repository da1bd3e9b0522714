"""Fallback page extraction from the SDK's "container list" result schema."""

from collections.abc import Mapping

from doc_capture.extraction.payload_scanner import PayloadScanner
from doc_capture.images.encoding import is_byte_buffer, is_recoverable_image_text
from doc_capture.images.models import EncodedImage
from doc_capture.images.normalizer import ImageNormalizer
from doc_capture.logging.logger import Log
from doc_capture.session.models import Page, PageList

_LIST_KEYS = ("List", "list", "Images")
_IMAGE_DATA_KEY = "ImageData"
_IMAGE_DATA_FIELDS = ("image", "Bytes", "Base64", "bytes")
_DIRECT_FIELDS = ("image", "Image", "Bytes", "Base64", "data", "Data", "value", "Value")


class ContainerListAdapter:
    """Turns a container list into an ordered page list, one page per usable entry.

    Per entry the image is taken from ``ImageData``, then from the longest
    direct image field, then from the longest value found by scanning the
    whole entry. Longer encodings usually are the full-resolution capture.
    """

    def __init__(
        self,
        scanner: PayloadScanner,
        normalizer: ImageNormalizer,
        *,
        min_base64_length: int = 5000,
    ) -> None:
        self._scanner = scanner
        self._normalizer = normalizer
        self._min_base64_length = min_base64_length

    def adapt(self, container_list: object) -> PageList:
        try:
            entries = _root_entries(container_list)
            pages: list[Page] = []
            for position, entry in enumerate(entries):
                image = self._adapt_entry(entry)
                if image is None:
                    Log.debug(f"Container list entry {position} has no usable image")
                    continue
                pages.append(Page(image=image, page_idx=len(pages)))
        except Exception as exc:
            Log.warning(f"Container list adaptation failed: {exc!r}")
            return PageList()
        Log.info(f"Container list converted to {len(pages)} page(s) from {len(entries)} entries")
        return PageList(tuple(pages))

    def _adapt_entry(self, entry: object) -> EncodedImage | None:
        if not isinstance(entry, Mapping):
            return None
        image = self._from_image_data(entry.get(_IMAGE_DATA_KEY))
        if image is None:
            image = _longest(self._normalize_fields(entry, _DIRECT_FIELDS))
        if image is None:
            image = _longest(self._scan_entry(entry))
        return image

    def _from_image_data(self, image_data: object) -> EncodedImage | None:
        if not isinstance(image_data, Mapping):
            return None
        images = self._normalize_fields(image_data, _IMAGE_DATA_FIELDS)
        return images[0] if images else None

    def _normalize_fields(
        self,
        node: Mapping[object, object],
        fields: tuple[str, ...],
    ) -> list[EncodedImage]:
        images = []
        for name in fields:
            value = node.get(name)
            if self._accepts(value) or is_byte_buffer(value):
                image = self._normalizer.normalize(value)
                if image is not None:
                    images.append(image)
        return images

    def _scan_entry(self, entry: Mapping[object, object]) -> list[EncodedImage]:
        candidates = self._scanner.scan_candidates(entry, accept=self._accepts)
        return self._normalizer.normalize_all(candidates)

    def _accepts(self, value: object) -> bool:
        return is_recoverable_image_text(value, self._min_base64_length)


def _root_entries(container_list: object) -> list[object]:
    if isinstance(container_list, list):
        return container_list
    if isinstance(container_list, Mapping):
        for key in _LIST_KEYS:
            value = container_list.get(key)
            if isinstance(value, list):
                return value
    return []


def _longest(images: list[EncodedImage]) -> EncodedImage | None:
    """Longest payload wins; the first one on ties."""
    if not images:
        return None
    return max(images, key=len)
