from dataclasses import dataclass

from doc_capture.images.encoding import ByteBuffer, strip_data_uri_prefix


@dataclass(frozen=True, eq=False)
class EncodedImage:
    """Canonical image artifact.

    ``data`` is a self-describing data URI. Two images are equal when their
    base64 payloads match, whatever prefix or media-type hint they carry.
    """

    data: str
    media_type: str | None = None

    @property
    def payload(self) -> str:
        """Base64 content without the data-URI prefix."""
        return strip_data_uri_prefix(self.data)

    def __len__(self) -> int:
        return len(self.payload)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EncodedImage):
            return NotImplemented
        return self.payload == other.payload

    def __hash__(self) -> int:
        return hash(self.payload)

    def __repr__(self) -> str:
        return f"EncodedImage(media_type={self.media_type!r}, length={len(self)})"


@dataclass(frozen=True)
class ImageCandidate:
    """A raw image-looking value found while walking an event payload."""

    value: str | ByteBuffer
    media_type_hint: str | None = None
