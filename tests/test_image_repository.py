import cv2
import numpy as np
import pytest

from models.color import Color
from models.errors import DecodeError
from repositories.image_repository import ImageRepository
from tests.conftest import encode, solid_pixels


@pytest.fixture
def repo():
    return ImageRepository()


def test_decode_png_keeps_rgb_order(repo):
    rgb = np.zeros((4, 6, 3), dtype=np.uint8)
    rgb[1, 2] = (255, 0, 16)

    img = repo.decode(encode(rgb))

    assert img.pixels.shape == (4, 6, 4)
    assert img.pixels.dtype == np.uint8
    assert repo.retrieve_pixel(img, 2, 1) == Color(255, 0, 16, 255)


def test_decode_keeps_alpha(repo):
    img = repo.decode(encode(solid_pixels(3, 3, (10, 20, 30), alpha=128)))

    assert repo.retrieve_pixel(img, 0, 0) == Color(10, 20, 30, 128)


def test_decode_expands_grayscale(repo):
    gray = np.full((5, 5), 77, dtype=np.uint8)

    img = repo.decode(encode(gray))

    assert repo.retrieve_pixel(img, 4, 4) == Color(77, 77, 77, 255)


def test_decode_reduces_16_bit_to_high_byte(repo):
    gray16 = np.full((2, 2), 0x1234, dtype=np.uint16)
    ok, buf = cv2.imencode(".png", gray16)
    assert ok

    img = repo.decode(buf.tobytes())

    assert img.pixels.dtype == np.uint8
    assert repo.retrieve_pixel(img, 1, 1) == Color(0x12, 0x12, 0x12, 255)


def test_decode_jpeg(repo):
    img = repo.decode(encode(np.zeros((8, 16, 3), dtype=np.uint8), fmt="JPEG"))

    assert repo.retrieve_image_dimensions(img) == (8, 16)


@pytest.mark.parametrize("data", [b"", b"definitely not an image", b"\x89PNG\r\n\x1a\n"])
def test_decode_rejects_bad_bytes(repo, data):
    with pytest.raises(DecodeError):
        repo.decode(data)


def test_load_reads_file(repo, tmp_path):
    path = tmp_path / "swatch.png"
    path.write_bytes(encode(solid_pixels(7, 3, (1, 2, 3))))

    img = repo.load(path)

    assert img.path == path
    assert (img.width, img.height) == (7, 3)


def test_load_missing_file(repo, tmp_path):
    with pytest.raises(DecodeError, match="missing.png"):
        repo.load(tmp_path / "missing.png")
