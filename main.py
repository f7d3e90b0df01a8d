import argparse
import logging
import sys
from typing import List, Optional

from commands import parse_commands, run
from config import ON_ERROR_CHOICES, CanvasConfig, config_from_args
from errors import CanvasError, CommandError
from logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = CanvasConfig()
    parser = argparse.ArgumentParser(
        prog="ascii-canvas",
        description="Draw on an ASCII canvas from a file of C/L/R/B commands.",
    )
    parser.add_argument("-i", "--input", default=defaults.input_path, help="command file to read")
    parser.add_argument("-o", "--output", default=defaults.output_path, help="file to write the renders to")
    parser.add_argument("--png", default=None, help="also save the final canvas as a PNG image")
    parser.add_argument("--cell-size", type=int, default=defaults.cell_size, help="pixels per cell in the PNG")
    parser.add_argument(
        "--on-error",
        choices=ON_ERROR_CHOICES,
        default=defaults.on_error,
        help="abort on the first rejected command, or skip it and carry on",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
    )
    return parser


def execute(config: CanvasConfig) -> None:
    """Reads the command file, runs it and writes the results."""
    with open(config.input_path, encoding="utf-8") as f:
        text = f.read()
    logger.info("Read %s", config.input_path)

    output, canvas = run(parse_commands(text), on_error=config.on_error)

    with open(config.output_path, "w", encoding="utf-8") as f:
        f.write(output)
    logger.info("Wrote %s", config.output_path)

    if config.png_path and canvas is not None:
        canvas.save_to_png(config.png_path, config)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))
    try:
        execute(config)
    except FileNotFoundError as e:
        logger.error("No such file: %s", e.filename)
        return 2
    except OSError as e:
        logger.error("Cannot access %s: %s", e.filename, e.strerror)
        return 2
    except UnicodeDecodeError as e:
        logger.error("%s is not valid UTF-8: %s", config.input_path, e)
        return 1
    except (CanvasError, CommandError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
