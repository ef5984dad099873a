import argparse
import logging
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from glyphgrid.charsets import CHARACTER_SETS
from glyphgrid.converter import ProgressEvent
from glyphgrid.errors import CapacityError, ConversionError
from glyphgrid.logging_conf import setup_logging
from glyphgrid.luminance import COLOR_MODES
from glyphgrid.pixels import PixelBuffer
from glyphgrid.settings import SIZES, ConversionSettings
from glyphgrid.worker import submit

logger = logging.getLogger(__name__)

FORMATS = ("text", "ansi", "markup")


def _report_progress(event: ProgressEvent) -> None:
    print(f"\r{event.percent:5.1f}% {event.stage:<40}", end="", file=sys.stderr, flush=True)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render an image as a grid of glyphs")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-c", "--charset", default="basic", choices=CHARACTER_SETS, help="Glyph palette to use (default: basic)"
    )
    parser.add_argument("--chars", default="", help="Custom palette, light to dense (with --charset custom)")
    parser.add_argument("-s", "--size", default="medium", choices=SIZES, help="Output size preset (default: medium)")
    parser.add_argument("-W", "--width", type=int, default=100, help="Columns for --size custom (10-500)")
    parser.add_argument("-H", "--height", type=int, default=50, help="Rows for --size custom (10-500)")
    parser.add_argument(
        "-m", "--mode", default="grayscale", choices=COLOR_MODES, help="Colour mode (default: grayscale)"
    )
    parser.add_argument("-f", "--format", default="text", choices=FORMATS, help="Output format (default: text)")
    parser.add_argument("-q", "--quiet", action="store_true", default=False, help="Do not show progress")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        return 1

    try:
        with Image.open(image_path) as image:
            buffer = PixelBuffer.from_image(image)
    except UnidentifiedImageError:
        print(f"Not a supported image: {image_path}", file=sys.stderr)
        return 1
    except ConversionError as exc:
        print(f"Cannot convert {image_path}: {exc}", file=sys.stderr)
        return 1
    logger.debug("Loaded %s as a %dx%d buffer", image_path, buffer.width, buffer.height)

    settings = ConversionSettings(
        character_set=args.charset,
        custom_characters=args.chars,
        size=args.size,
        custom_width=args.width,
        custom_height=args.height,
        color_mode=args.mode,
        image_width=buffer.width,
        image_height=buffer.height,
    )

    job = submit(buffer, settings)
    try:
        result = job.result(on_progress=None if args.quiet else _report_progress)
    except CapacityError as exc:
        print(f"\nCannot convert {image_path}: {exc.reason}. {exc.suggestion}.", file=sys.stderr)
        return 1
    except ConversionError as exc:
        print(f"\nConversion failed: {exc}", file=sys.stderr)
        return 1
    if not args.quiet:
        print(file=sys.stderr)

    if args.format == "ansi":
        print(result.to_ansi())
    elif args.format == "markup":
        print(result.to_markup())
    else:
        print(result.to_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
