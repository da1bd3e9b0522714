import pytest

from doc_capture.images.models import EncodedImage
from doc_capture.images.normalizer import ImageNormalizer


@pytest.fixture()
def normalizer() -> ImageNormalizer:
    return ImageNormalizer(default_media_type="image/jpeg")


@pytest.fixture()
def front_b64() -> str:
    """Bare base64 text long enough to pass the scanner threshold."""
    return "A" * 6000


@pytest.fixture()
def back_b64() -> str:
    """A second capture, 100 characters longer than the front."""
    return "B" * 6100


@pytest.fixture()
def front_image(front_b64: str) -> EncodedImage:
    return EncodedImage(data=f"data:image/jpeg;base64,{front_b64}", media_type="image/jpeg")


@pytest.fixture()
def back_image(back_b64: str) -> EncodedImage:
    return EncodedImage(data=f"data:image/jpeg;base64,{back_b64}", media_type="image/jpeg")
