from pathlib import Path
from typing import Tuple, Union
import base64
from io import BytesIO
import numpy as np
from PIL import Image as PILImage
from models.image import Image
from models.color import Color
from repositories.image_repository import ImageRepository


class ImageService:
    """I/O and conversion helpers.  No color math."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def load(self, path: str | Path) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def decode(self, data: bytes, path: Union[str, Path] = None) -> Image:
        """Decode uploaded bytes into an Image object."""
        return self.image_repository.decode(data, path)

    def get_image_dimensions(self, img: Image) -> Tuple[int, int]:
        return self.image_repository.retrieve_image_dimensions(img)

    def get_pixel_color(self, img: Image, px: int, py: int) -> Color:
        return self.image_repository.retrieve_pixel(img, px, py)

    def to_pil_image(self, img: Image) -> PILImage.Image:
        """
        Convert Image.pixels → PIL Image object.
        Ensures the NumPy array is C-contiguous.
        """
        np_img = img.pixels
        if not np_img.flags['C_CONTIGUOUS']:
            np_img = np.ascontiguousarray(np_img)

        return PILImage.fromarray(np_img)

    def to_base64_png(self, img: Image) -> str:
        """Encode an Image as a PNG data URL for JSON responses."""
        buffer = BytesIO()
        self.to_pil_image(img).save(buffer, format='PNG')
        base64_string = base64.b64encode(buffer.getvalue()).decode('utf-8')
        return f"data:image/png;base64,{base64_string}"
