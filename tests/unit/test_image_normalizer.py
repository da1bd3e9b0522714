import base64

from doc_capture.images.models import EncodedImage, ImageCandidate
from doc_capture.images.normalizer import ImageNormalizer


class TestDataUri:
    def test_passes_through_unchanged(self, normalizer: ImageNormalizer) -> None:
        uri = "data:image/png;base64,iVBORw0KGgo="
        image = normalizer.normalize(uri)
        assert image is not None
        assert image.data == uri
        assert image.media_type == "image/png"

    def test_is_idempotent(self, normalizer: ImageNormalizer, front_b64: str) -> None:
        once = normalizer.normalize(front_b64)
        twice = normalizer.normalize(once)
        assert twice is once
        assert normalizer.normalize(once.data) == once  # type: ignore[union-attr]


class TestBareBase64:
    def test_wraps_with_default_media_type(self, normalizer: ImageNormalizer) -> None:
        image = normalizer.normalize("QUJD")
        assert image is not None
        assert image.data == "data:image/jpeg;base64,QUJD"
        assert image.media_type == "image/jpeg"

    def test_uses_media_type_hint(self, normalizer: ImageNormalizer) -> None:
        image = normalizer.normalize("QUJD", "image/png")
        assert image is not None
        assert image.data == "data:image/png;base64,QUJD"

    def test_rejects_non_base64_text(self, normalizer: ImageNormalizer) -> None:
        assert normalizer.normalize("hello world!") is None

    def test_rejects_empty_text(self, normalizer: ImageNormalizer) -> None:
        assert normalizer.normalize("") is None


class TestBytes:
    def test_encodes_raw_bytes(self, normalizer: ImageNormalizer) -> None:
        image = normalizer.normalize(b"\xff\xd8\xff\xe0")
        assert image is not None
        assert image.payload == base64.b64encode(b"\xff\xd8\xff\xe0").decode()

    def test_encodes_bytearray_and_memoryview(self, normalizer: ImageNormalizer) -> None:
        raw = b"\x89PNG"
        assert normalizer.normalize(bytearray(raw)) == normalizer.normalize(memoryview(raw))

    def test_unwraps_byte_container_with_mime(self, normalizer: ImageNormalizer) -> None:
        image = normalizer.normalize({"buffer": b"\x89PNG", "mime": "image/png"})
        assert image is not None
        assert image.media_type == "image/png"
        assert image.data.startswith("data:image/png;base64,")

    def test_container_without_bytes_is_rejected(self, normalizer: ImageNormalizer) -> None:
        assert normalizer.normalize({"data": "not bytes"}) is None


class TestOtherInputs:
    def test_unrecognized_shapes_return_none(self, normalizer: ImageNormalizer) -> None:
        assert normalizer.normalize(42) is None
        assert normalizer.normalize(None) is None
        assert normalizer.normalize(["QUJD"]) is None

    def test_candidate_hint_is_used(self, normalizer: ImageNormalizer) -> None:
        image = normalizer.normalize(ImageCandidate("QUJD", "image/gif"))
        assert image is not None
        assert image.media_type == "image/gif"

    def test_normalize_all_drops_unusable(self, normalizer: ImageNormalizer) -> None:
        images = normalizer.normalize_all(
            [ImageCandidate("QUJD"), ImageCandidate("not base64!"), ImageCandidate(b"x")]
        )
        assert len(images) == 2


class TestEncodedImageEquality:
    def test_equal_by_payload_regardless_of_prefix(self) -> None:
        jpeg = EncodedImage("data:image/jpeg;base64,QUJD", "image/jpeg")
        png = EncodedImage("data:image/png;base64,QUJD", "image/png")
        assert jpeg == png
        assert hash(jpeg) == hash(png)

    def test_length_is_payload_length(self) -> None:
        assert len(EncodedImage("data:image/jpeg;base64,QUJD")) == 4
