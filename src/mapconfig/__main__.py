"""
Main entry point for mapconfig.
Usage: python -m mapconfig CONFIG
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import ConfigParser, ValidationMap, rotation_name, summarize
from .report import format_validation, validation_report
from .utils.logging_config import LoggingOptions, setup_logging


def build_argument_parser() -> argparse.ArgumentParser:
    """Build the command line interface."""
    parser = argparse.ArgumentParser(
        prog="mapconfig",
        description="Validate a map render configuration file.",
    )
    parser.add_argument("config", type=Path, help="configuration file to validate")
    parser.add_argument(
        "--json",
        action="store_true",
        help="print the validation report as JSON on stdout",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug output"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="disable colored console output"
    )
    parser.add_argument("--log-file", type=Path, help="also log to this file")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def log_validation(validation: ValidationMap, logger: logging.Logger) -> None:
    """Log every warning and error of a validation map."""
    result = summarize(validation)
    for warning in result.warnings:
        logger.warning(warning)
    for error in result.errors:
        logger.error(error)


def log_summary(config: ConfigParser, logger: logging.Logger) -> None:
    """Log what a valid configuration is going to render."""
    logger.info(f"Output directory: {config.output_dir}")
    for name, world in config.worlds.items():
        logger.info(f"World '{name}': {world.input_dir}")
    for map_ in config.maps:
        rotations = ", ".join(rotation_name(r) for r in sorted(map_.rotation_set))
        logger.info(
            f"Map '{map_.short_name}' ({map_.long_name}): world '{map_.world}', "
            f"rendermode {map_.rendermode}, rotations {rotations}, "
            f"texture size {map_.texture_size}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_argument_parser().parse_args(argv)

    setup_logging(
        LoggingOptions(
            console_level="DEBUG" if args.verbose else "INFO",
            use_colors=not args.no_color,
            log_file=args.log_file,
        )
    )
    logger = logging.getLogger(f"{__name__}.main")

    try:
        config = ConfigParser()
        validation: ValidationMap = {}
        ok = config.parse(args.config, validation)
        log_validation(validation, logger)

        if args.json:
            sys.stdout.write(validation_report(validation).decode("utf-8") + "\n")
        else:
            for line in format_validation(validation):
                print(line)

        if not ok:
            logger.error("Configuration validation failed")
            return 1

        log_summary(config, logger)
        return 0

    except Exception:
        logger.exception("Unhandled exception in main")
        return 1


if __name__ == "__main__":
    sys.exit(main())
