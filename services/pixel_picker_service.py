import math
import logging
from models.image import Image
from models.geometry import DisplayGeometry, ClickPoint
from models.pick_result import PickResult
from models.errors import OutOfBoundsError
from services.image_service import ImageService

logger = logging.getLogger(__name__)


class PixelPickerService:
    """
    Maps clicks on a scaled rendering back onto source pixels.
    """

    def __init__(self):
        self.image_service = ImageService()

    def to_source_pixel(self, img: Image, display: DisplayGeometry, click: ClickPoint):
        """
        Scale a display-space click into source pixel coordinates.

        Truncates toward negative infinity, so clicks left of or above the
        rendered image produce negative coordinates rather than pixel 0.

        Raises:
            OutOfBoundsError: if the display geometry has no area, or any
                coordinate is not a finite number.
        """
        values = (click.x, click.y, display.width, display.height)
        if not all(math.isfinite(v) for v in values):
            raise OutOfBoundsError(f"Non-finite click {click} on display {display}")

        if display.is_degenerate:
            raise OutOfBoundsError(f"Display size {display.width}x{display.height} has no area")

        height, width = self.image_service.get_image_dimensions(img)
        ratio_x = width / display.width
        ratio_y = height / display.height

        source_x = click.x * ratio_x
        source_y = click.y * ratio_y
        # huge finite clicks can still overflow once scaled
        if not (math.isfinite(source_x) and math.isfinite(source_y)):
            raise OutOfBoundsError(f"Click {click} overflows when scaled to the image")

        return math.floor(source_x), math.floor(source_y)

    def map_click(self, img: Image, display: DisplayGeometry, click: ClickPoint) -> PickResult:
        """
        Args:
            img (Image): Decoded source image.
            display (DisplayGeometry): Size the image is rendered at.
            click (ClickPoint): Click position inside the rendered image.

        Returns:
            PickResult: Source pixel coordinate and its color.

        Raises:
            OutOfBoundsError: if the click maps outside the image.
        """
        px, py = self.to_source_pixel(img, display, click)
        height, width = self.image_service.get_image_dimensions(img)

        if not (0 <= px < width and 0 <= py < height):
            logger.debug(f"Click ({click.x}, {click.y}) mapped to ({px}, {py}), outside {width}x{height}")
            raise OutOfBoundsError(f"Pixel ({px}, {py}) outside {width}x{height} image")

        color = self.image_service.get_pixel_color(img, px, py)
        return PickResult(x=px, y=py, color=color)
