import os
import sys
import logging
import argparse
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

# --- Centralized Logging Configuration ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING"),
    format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
    datefmt='%H:%M:%S'
)

from models.errors import DecodeError
from models.geometry import DisplayGeometry, ClickPoint
from pipeline.pick_color import pick_color
from pipeline.dominant_color import estimate_dominant_color
from services.dominant_color_service import DominantColorService
from services.image_service import ImageService
from services.report_service import ReportService

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="color-picker",
        description="Read the color at a point of an image, or its dominant color."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    pick = commands.add_parser("pick", help="color under a click")
    pick.add_argument("image", help="PNG/JPEG file")
    pick.add_argument("x", type=float, help="click x in display units")
    pick.add_argument("y", type=float, help="click y in display units")
    pick.add_argument("--display-width", type=float,
                      help="rendered width (defaults to the image width)")
    pick.add_argument("--display-height", type=float,
                      help="rendered height (defaults to the image height)")

    dominant = commands.add_parser("dominant", help="dominant color of the image")
    dominant.add_argument("image", help="PNG/JPEG file")
    dominant.add_argument("--sample-width", type=positive_int,
                          help="width the image is downsampled to before averaging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    image_service = ImageService()
    report_service = ReportService()

    try:
        img = image_service.load(args.image)
    except DecodeError as err:
        logger.warning(f"Decode failed: {err}")
        print(report_service.decode_failure_report().message)
        return 1

    if args.command == "pick":
        display = DisplayGeometry(
            img.width if args.display_width is None else args.display_width,
            img.height if args.display_height is None else args.display_height,
        )
        report = pick_color(img, display, ClickPoint(args.x, args.y),
                            report_service=report_service)
    else:
        report = estimate_dominant_color(img,
                                         dominant_color_service=DominantColorService(args.sample_width),
                                         report_service=report_service)

    print(report.message)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
