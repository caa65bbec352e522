import os
import logging
import numpy as np
from PIL import Image as PILImage
from dotenv import load_dotenv
from models.image import Image
from models.color import Color
from models.errors import DegenerateImageError
from services.image_service import ImageService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class DominantColorService:
    """
    Estimates an image's dominant color as the channel-wise mean of a
    Lanczos-downsampled copy. Sampling keeps the cost independent of the
    source resolution.
    """

    def __init__(self, sample_width: int | None = None, max_aspect: int | None = None):
        if sample_width is None:
            sample_width = int(os.getenv("DOMINANT_SAMPLE_WIDTH", "100"))
        if max_aspect is None:
            max_aspect = int(os.getenv("DOMINANT_MAX_ASPECT", "10"))
        if sample_width <= 0:
            raise ValueError(f"Sample width must be positive, got {sample_width}")
        if max_aspect <= 0:
            raise ValueError(f"Max aspect must be positive, got {max_aspect}")
        self.SAMPLE_WIDTH = sample_width
        # Tall samples stop growing at SAMPLE_WIDTH * MAX_ASPECT rows
        self.MAX_SAMPLE_HEIGHT = sample_width * max_aspect
        self.image_service = ImageService()

    def get_sample_size(self, width: int, height: int):
        """
        Target (width, height) keeping the aspect ratio, never below one row.

        Images taller than MAX_ASPECT times their width are fitted into a
        SAMPLE_WIDTH x MAX_SAMPLE_HEIGHT box instead, so the sample area stays bounded.
        """
        sample_height = max(1, int(height * self.SAMPLE_WIDTH / width))
        if sample_height <= self.MAX_SAMPLE_HEIGHT:
            return self.SAMPLE_WIDTH, sample_height

        sample_width = max(1, int(width * self.MAX_SAMPLE_HEIGHT / height))
        return sample_width, self.MAX_SAMPLE_HEIGHT

    def downsample(self, img: Image) -> np.ndarray:
        """
        Returns:
            np.ndarray: (h, w, 3) uint8 RGB sample, w <= SAMPLE_WIDTH, h <= MAX_SAMPLE_HEIGHT.
        """
        height, width = self.image_service.get_image_dimensions(img)
        size = self.get_sample_size(width, height)

        pil_img = self.image_service.to_pil_image(img).convert("RGB")
        resized = pil_img.resize(size, resample=PILImage.Resampling.LANCZOS)
        return np.asarray(resized)

    def dominant_color(self, img: Image) -> Color:
        """
        Args:
            img (Image): Decoded source image.

        Returns:
            Color: Mean R, G, B of the downsampled image (truncated), opaque.

        Raises:
            DegenerateImageError: if the image has zero width or height.
        """
        height, width = self.image_service.get_image_dimensions(img)
        if width == 0 or height == 0:
            raise DegenerateImageError(f"Cannot average a {width}x{height} image")

        sample = self.downsample(img)
        channels = sample.reshape(-1, 3).astype(np.uint64)
        count = channels.shape[0]
        sums = channels.sum(axis=0)

        r, g, b = (int(total // count) for total in sums)
        logger.debug(f"Averaged {count} sampled pixels from {width}x{height} image")
        return Color(r, g, b)
