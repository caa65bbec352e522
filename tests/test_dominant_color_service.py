import numpy as np
import pytest

from models.color import Color
from models.errors import DegenerateImageError
from models.image import Image
from services.dominant_color_service import DominantColorService
from tests.conftest import solid_pixels


@pytest.fixture
def service():
    return DominantColorService()


@pytest.mark.parametrize("width, height", [(1, 1), (37, 23), (100, 100), (640, 480), (3, 500), (1000, 2)])
def test_uniform_image_returns_its_color(service, width, height):
    img = Image(pixels=solid_pixels(width, height, (12, 200, 77)))

    assert service.dominant_color(img) == Color(12, 200, 77, 255)


def test_alpha_is_ignored_and_result_is_opaque(service):
    img = Image(pixels=solid_pixels(50, 50, (90, 10, 250), alpha=0))

    assert service.dominant_color(img) == Color(90, 10, 250, 255)


def test_half_black_half_white_is_mid_gray(service):
    pixels = solid_pixels(200, 100, (0, 0, 0))
    pixels[:, 100:] = (255, 255, 255, 255)

    color = service.dominant_color(Image(pixels=pixels))

    for channel in color.as_rgb():
        assert abs(channel - 127) <= 2


def test_sample_size_keeps_aspect_ratio(service):
    assert service.get_sample_size(400, 200) == (100, 50)
    assert service.get_sample_size(50, 50) == (100, 100)
    assert service.get_sample_size(1000, 2) == (100, 1)


def test_downsample_has_fixed_width(service):
    sample = service.downsample(Image(pixels=solid_pixels(640, 480, (1, 2, 3))))

    assert sample.shape == (75, 100, 3)


def test_custom_sample_width():
    service = DominantColorService(sample_width=10)

    assert service.get_sample_size(40, 20) == (10, 5)


@pytest.mark.parametrize("shape", [(0, 10, 4), (10, 0, 4), (0, 0, 4)])
def test_zero_area_is_rejected(service, shape):
    with pytest.raises(DegenerateImageError):
        service.dominant_color(Image(pixels=np.zeros(shape, dtype=np.uint8)))


def test_explicit_sample_width_is_not_replaced_by_default():
    with pytest.raises(ValueError):
        DominantColorService(sample_width=0)


def test_negative_sample_width_is_rejected():
    with pytest.raises(ValueError):
        DominantColorService(sample_width=-5)


@pytest.mark.parametrize("width, height", [(1, 100000), (3, 500), (7, 1_000_000)])
def test_tall_images_have_bounded_sample_area(service, width, height):
    sample_width, sample_height = service.get_sample_size(width, height)

    assert 1 <= sample_width <= service.SAMPLE_WIDTH
    assert sample_height == service.MAX_SAMPLE_HEIGHT
    assert sample_width * sample_height <= service.SAMPLE_WIDTH * service.MAX_SAMPLE_HEIGHT


def test_sample_height_cap_follows_max_aspect():
    service = DominantColorService(sample_width=10, max_aspect=2)

    assert service.get_sample_size(10, 15) == (10, 15)
    assert service.get_sample_size(10, 100) == (2, 20)


def test_tall_uniform_image_keeps_its_color(service):
    img = Image(pixels=solid_pixels(2, 5000, (33, 66, 99)))

    assert service.dominant_color(img) == Color(33, 66, 99, 255)
