import os
import numpy as np
from dotenv import load_dotenv
from models.color import Color
from models.color_report import ColorReport
from models.image import Image
from models.pick_result import PickResult
from services.image_service import ImageService

# Load environment variables
load_dotenv()

PROMPT_MESSAGE = "Upload an image and click to get the color at that spot."
READY_MESSAGE = "Image loaded. You can now click it."
OUTSIDE_MESSAGE = "Click was outside the image area."
DECODE_FAILURE_MESSAGE = "Failed to decode image."
DEGENERATE_MESSAGE = "Image has no pixels to average."


class ReportService:
    """
    Turns computed colors (or failures) into what the UI shows:
    a status line and a swatch.
    """

    def __init__(self):
        self.SWATCH_SIZE = int(os.getenv("SWATCH_SIZE", "100"))
        self.image_service = ImageService()

    @staticmethod
    def describe_color(color: Color) -> str:
        return f"R:{color.r} G:{color.g} B:{color.b} ({color.hex})"

    def pick_report(self, result: PickResult) -> ColorReport:
        message = f"Clicked ({result.x}, {result.y}): {self.describe_color(result.color)}"
        return ColorReport(message=message, color=result.color, pixel=result.pixel)

    def dominant_report(self, color: Color) -> ColorReport:
        return ColorReport(message=f"Dominant color: {self.describe_color(color)}", color=color)

    @staticmethod
    def prompt_report() -> ColorReport:
        return ColorReport(message=PROMPT_MESSAGE)

    @staticmethod
    def ready_report() -> ColorReport:
        return ColorReport(message=READY_MESSAGE)

    @staticmethod
    def outside_report() -> ColorReport:
        return ColorReport(message=OUTSIDE_MESSAGE)

    @staticmethod
    def decode_failure_report() -> ColorReport:
        return ColorReport(message=DECODE_FAILURE_MESSAGE)

    @staticmethod
    def degenerate_report() -> ColorReport:
        return ColorReport(message=DEGENERATE_MESSAGE)

    def render_swatch(self, color: Color, size: int | None = None) -> Image:
        """
        Solid square filled with *color* (always opaque).
        """
        size = size or self.SWATCH_SIZE
        pixels = np.empty((size, size, 4), dtype=np.uint8)
        pixels[:, :] = (color.r, color.g, color.b, 255)
        return self.image_service.create_image(pixels)

    def swatch_base64(self, color: Color, size: int | None = None) -> str:
        return self.image_service.to_base64_png(self.render_swatch(color, size))
