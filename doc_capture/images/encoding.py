"""Predicates and conversions for base64 and data-URI encoded images."""

import base64
import re

_DATA_URI_RE = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+);base64,")
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/=]+$")

# Leading base64 characters of JPEG, PNG, GIF and PDF streams.
_IMAGE_SIGNATURES = ("/9j/", "iVBOR", "R0lGOD", "JVBER")
_SIGNATURE_MIN_LENGTH = 80

ByteBuffer = bytes | bytearray | memoryview


def is_byte_buffer(value: object) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def is_data_uri(value: object) -> bool:
    return isinstance(value, str) and _DATA_URI_RE.match(value) is not None


def data_uri_media_type(value: str) -> str | None:
    match = _DATA_URI_RE.match(value)
    return match.group(1) if match else None


def strip_data_uri_prefix(value: str) -> str:
    """Return the bare base64 payload of a data URI; other strings pass through."""
    return _DATA_URI_RE.sub("", value, count=1)


def is_base64_text(value: object) -> bool:
    return isinstance(value, str) and _BASE64_RE.match(value) is not None


def looks_like_base64(value: object, min_length: int) -> bool:
    """True for pure base64-alphabet text longer than ``min_length`` characters."""
    return is_base64_text(value) and len(value) > min_length  # type: ignore[arg-type]


def has_image_signature(value: object) -> bool:
    """True for data URIs or base64 text starting with a known file signature."""
    if not isinstance(value, str) or len(value) <= _SIGNATURE_MIN_LENGTH:
        return False
    return is_data_uri(value) or value.startswith(_IMAGE_SIGNATURES)


def bytes_to_base64(buffer: ByteBuffer) -> str:
    return base64.b64encode(bytes(buffer)).decode("ascii")


def to_data_uri(payload: str, media_type: str) -> str:
    return f"data:{media_type};base64,{payload}"


def is_recoverable_image_text(value: object, min_base64_length: int) -> bool:
    """Looser predicate for fields already known to carry images."""
    return has_image_signature(value) or is_data_uri(value) or looks_like_base64(
        value, min_base64_length
    )
