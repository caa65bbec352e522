# pipeline/pick_color.py
import logging

from models.color_report import ColorReport
from models.errors import DecodeError, OutOfBoundsError
from models.geometry import DisplayGeometry, ClickPoint
from models.image import Image
from services.image_service import ImageService
from services.pixel_picker_service import PixelPickerService
from services.report_service import ReportService

logger = logging.getLogger(__name__)


def pick_color(
    img: Image,
    display: DisplayGeometry,
    click: ClickPoint,
    *,
    picker_service: PixelPickerService = PixelPickerService(),
    report_service: ReportService      = ReportService(),
) -> ColorReport:
    """
    Resolve a click on the rendered image into a report for the UI.
    A miss yields the "outside" message and no swatch color.
    """
    try:
        result = picker_service.map_click(img, display, click)
    except OutOfBoundsError as err:
        logger.info(f"Click missed the image: {err}")
        return report_service.outside_report()

    return report_service.pick_report(result)


def pick_color_from_bytes(
    data: bytes,
    display: DisplayGeometry | None,
    click: ClickPoint,
    *,
    image_service: ImageService        = ImageService(),
    picker_service: PixelPickerService = PixelPickerService(),
    report_service: ReportService      = ReportService(),
) -> ColorReport:
    """
    Decode *data* and pick the color under *click*.
    With no *display*, the image is assumed to be rendered at native size.
    """
    try:
        img = image_service.decode(data)
    except DecodeError as err:
        logger.warning(f"Decode failed: {err}")
        return report_service.decode_failure_report()

    if display is None:
        display = DisplayGeometry(img.width, img.height)

    return pick_color(img, display, click,
                      picker_service=picker_service,
                      report_service=report_service)
