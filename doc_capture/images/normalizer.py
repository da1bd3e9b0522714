from collections.abc import Mapping

from doc_capture.images.encoding import (
    bytes_to_base64,
    data_uri_media_type,
    is_base64_text,
    is_byte_buffer,
    is_data_uri,
    to_data_uri,
)
from doc_capture.images.models import EncodedImage, ImageCandidate

_WRAPPED_BYTE_KEYS = ("data", "bytes", "buffer")
_WRAPPED_MIME_KEYS = ("mime", "contentType")


class ImageNormalizer:
    """Converts located image values into canonical ``EncodedImage`` objects."""

    def __init__(self, default_media_type: str = "image/jpeg") -> None:
        self._default_media_type = default_media_type

    def normalize(
        self,
        candidate: object,
        media_type_hint: str | None = None,
    ) -> EncodedImage | None:
        """Return the canonical form of ``candidate``, or None if it is not an image.

        Accepts data URIs (returned unchanged), bare base64 text, raw byte
        buffers, byte containers such as ``{"data": b"...", "mime": ...}``,
        ``ImageCandidate`` and already-normalized ``EncodedImage`` values.
        """
        if isinstance(candidate, EncodedImage):
            return candidate
        if isinstance(candidate, ImageCandidate):
            return self.normalize(candidate.value, media_type_hint or candidate.media_type_hint)
        if isinstance(candidate, str):
            return self._from_text(candidate, media_type_hint)
        if is_byte_buffer(candidate):
            return self._wrap(bytes_to_base64(candidate), media_type_hint)  # type: ignore[arg-type]
        if isinstance(candidate, Mapping):
            return self._from_byte_container(candidate, media_type_hint)
        return None

    def normalize_all(self, candidates: list[ImageCandidate]) -> list[EncodedImage]:
        images = []
        for candidate in candidates:
            image = self.normalize(candidate)
            if image is not None:
                images.append(image)
        return images

    def _from_text(self, text: str, media_type_hint: str | None) -> EncodedImage | None:
        if is_data_uri(text):
            return EncodedImage(data=text, media_type=data_uri_media_type(text))
        if is_base64_text(text):
            return self._wrap(text, media_type_hint)
        return None

    def _from_byte_container(
        self,
        container: Mapping[object, object],
        media_type_hint: str | None,
    ) -> EncodedImage | None:
        hint = media_type_hint or _first_str(container, _WRAPPED_MIME_KEYS)
        for key in _WRAPPED_BYTE_KEYS:
            value = container.get(key)
            if is_byte_buffer(value):
                return self._wrap(bytes_to_base64(value), hint)  # type: ignore[arg-type]
        return None

    def _wrap(self, payload: str, media_type_hint: str | None) -> EncodedImage:
        media_type = media_type_hint or self._default_media_type
        return EncodedImage(data=to_data_uri(payload, media_type), media_type=media_type)


def _first_str(mapping: Mapping[object, object], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = mapping.get(key)
        if isinstance(value, str) and value:
            return value
    return None
