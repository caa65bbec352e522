# pipeline/dominant_color.py
import logging

from models.color_report import ColorReport
from models.errors import DecodeError, DegenerateImageError
from models.image import Image
from services.dominant_color_service import DominantColorService
from services.image_service import ImageService
from services.report_service import ReportService

logger = logging.getLogger(__name__)


def estimate_dominant_color(
    img: Image,
    *,
    dominant_color_service: DominantColorService = DominantColorService(),
    report_service: ReportService                = ReportService(),
) -> ColorReport:
    try:
        color = dominant_color_service.dominant_color(img)
    except DegenerateImageError as err:
        logger.warning(f"Cannot estimate dominant color: {err}")
        return report_service.degenerate_report()

    return report_service.dominant_report(color)


def estimate_dominant_color_from_bytes(
    data: bytes,
    *,
    image_service: ImageService                  = ImageService(),
    dominant_color_service: DominantColorService = DominantColorService(),
    report_service: ReportService                = ReportService(),
) -> ColorReport:
    """
    Decode *data* and report its dominant color, or a decode failure.
    """
    try:
        img = image_service.decode(data)
    except DecodeError as err:
        logger.warning(f"Decode failed: {err}")
        return report_service.decode_failure_report()

    return estimate_dominant_color(img,
                                   dominant_color_service=dominant_color_service,
                                   report_service=report_service)
