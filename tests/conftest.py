from io import BytesIO

import numpy as np
import pytest
from PIL import Image as PILImage

from models.image import Image


def solid_pixels(width: int, height: int, rgb, alpha: int = 255) -> np.ndarray:
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :] = (*rgb, alpha)
    return pixels


def encode(pixels: np.ndarray, fmt: str = "PNG") -> bytes:
    buffer = BytesIO()
    PILImage.fromarray(pixels).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def random_image() -> Image:
    rng = np.random.default_rng(7)
    return Image(pixels=rng.integers(0, 256, size=(60, 80, 4), dtype=np.uint8))


@pytest.fixture
def sample_400() -> Image:
    pixels = solid_pixels(400, 400, (200, 200, 200))
    pixels[20, 10] = (12, 34, 56, 255)
    return Image(pixels=pixels)


@pytest.fixture
def sample_400_png(sample_400) -> bytes:
    return encode(sample_400.pixels)
