"""
Logging configuration for mapconfig.
"""

import logging
import logging.handlers
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class LoggingOptions:
    """Runtime logging options, usually taken from the command line."""
    console_level: str = "INFO"
    use_colors: bool = True
    log_file: Optional[Path] = None


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color is None:
            return formatted
        # Only the first occurrence, the message may contain the level name too
        return formatted.replace(
            record.levelname, f"{color}{record.levelname}{self.RESET}", 1
        )


class CSVFormatter(logging.Formatter):
    """Semicolon separated formatter for file logging."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname.ljust(8)
        module = record.name
        line_no = str(record.lineno)

        # Quotes are doubled, the standard CSV way
        message = record.getMessage().replace('"', '""')

        return f'"{timestamp}";{level};"{module}";"{line_no}";"{message}"'


def setup_logging(options: Optional[LoggingOptions] = None) -> None:
    """
    Setup application logging with a console and an optional file handler.

    Args:
        options: Logging options, defaults to INFO on a colored console
    """
    if options is None:
        options = LoggingOptions()

    # Root captures everything, handlers filter
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    logging.getLogger("mapconfig").setLevel(logging.DEBUG)

    root_logger.handlers.clear()

    fmt = "%(asctime)s : %(levelname)-8s : %(message)s"
    if options.use_colors:
        console_formatter: logging.Formatter = ColoredFormatter(fmt=fmt, datefmt="%H:%M:%S")
    else:
        console_formatter = logging.Formatter(fmt=fmt, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        getattr(logging, options.console_level.upper(), logging.INFO)
    )
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    log_path = None
    if options.log_file is not None:
        try:
            log_path = Path(options.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)  # File always captures DEBUG
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Console logging still works
            log_path = None
            root_logger.warning(f"Could not setup file logging: {e}")

    logger = logging.getLogger(__name__)
    logger.debug(
        f"Console logging: {options.console_level} (colors: {options.use_colors})"
    )
    if log_path is not None:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")
