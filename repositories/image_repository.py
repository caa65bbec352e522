from pathlib import Path
from typing import Tuple, Union
import logging
import numpy as np
import cv2
from models.image import Image
from models.color import Color
from models.errors import DecodeError

logger = logging.getLogger(__name__)

# cv2 hands back BGR(A) or single-channel arrays; everything leaves here as RGBA.
_TO_RGBA = {
    1: cv2.COLOR_GRAY2RGBA,
    3: cv2.COLOR_BGR2RGBA,
    4: cv2.COLOR_BGRA2RGBA,
}


class ImageRepository:
    """
    Handles decoding and pixel reads for Image entities.
    """

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    def retrieve_image_dimensions(self, img: Image) -> Tuple[int, int]:
        return img.pixels.shape[:2]

    @staticmethod
    def retrieve_pixel(img: Image, px: int, py: int) -> Color:
        # numpy indexes rows first
        return Color.from_pixel(img.pixels[py, px])

    @staticmethod
    def _to_8bit(arr: np.ndarray) -> np.ndarray:
        if arr.dtype == np.uint8:
            return arr
        if arr.dtype == np.uint16:
            # keep the high byte, same as reading a 16-bit channel as 8-bit
            return (arr >> 8).astype(np.uint8)
        raise DecodeError(f"Unsupported pixel depth: {arr.dtype}")

    @classmethod
    def _to_rgba(cls, arr: np.ndarray) -> np.ndarray:
        arr = cls._to_8bit(arr)
        channels = 1 if arr.ndim == 2 else arr.shape[2]
        if channels not in _TO_RGBA:
            raise DecodeError(f"Unsupported channel count: {channels}")
        return cv2.cvtColor(arr, _TO_RGBA[channels])

    def decode(self, data: bytes, path: Union[str, Path] = None) -> Image:
        """
        Decode an encoded raster (PNG, JPEG, ...) into an RGBA Image.

        Raises:
            DecodeError: if the bytes are empty or cannot be decoded.
        """
        if not data:
            raise DecodeError("No image data")

        buf = np.frombuffer(data, dtype=np.uint8)
        try:
            arr = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED)
        except cv2.error as err:
            raise DecodeError(f"Decoder rejected input: {err}") from err

        if arr is None or arr.size == 0:
            raise DecodeError("Image data is malformed or in an unsupported format")

        pixels = self._to_rgba(arr)
        logger.debug(f"Decoded {pixels.shape[1]}x{pixels.shape[0]} image")
        return self.create_image(pixels, path)

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise DecodeError(f"Image not found or unreadable: {path}") from err
        return self.decode(data, path)
