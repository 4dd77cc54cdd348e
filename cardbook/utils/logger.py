"""
Logging Configuration Module.

All contact book loggers live under the ``cardbook`` namespace. Log
records go to stderr (stdout is reserved for command output) and,
optionally, to a rotating log file.

Usage:
    from cardbook.utils.logger import setup_logger, get_logger

    # Initialize logging (call once at startup)
    setup_logger()

    # Get logger in any module
    logger = get_logger(__name__)
    logger.info("Scanning business card...")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

import colorama
from colorama import Fore, Style

colorama.init()

ROOT_LOGGER_NAME = "cardbook"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name of console records.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Red (bold)
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        # Pad before coloring so the column width ignores escape codes
        record.levelname = f"{color}{original:<8}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper())


def setup_logger(
    level: Union[str, int] = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 1048576,  # 1 MB
    backup_count: int = 3,
    colorize: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure the ``cardbook`` logger.

    Safe to call again: existing handlers are replaced, never stacked.

    Args:
        level: Logging level name or number.
        log_format: Record format; defaults to DEFAULT_FORMAT.
        date_format: Date format; defaults to DEFAULT_DATE_FORMAT.
        log_file: Path to log file. If None, file logging is disabled.
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of rotated files to keep.
        colorize: Color level names when the console is a terminal.
        stream: Console stream (default: sys.stderr).

    Returns:
        Configured application logger.

    Example:
        >>> setup_logger(level="DEBUG", log_file="logs/cardbook.log")
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    stream = stream or sys.stderr

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(_to_level(level))
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream)
    if colorize and getattr(stream, "isatty", lambda: False)():
        console_handler.setFormatter(ColoredFormatter(log_format, datefmt=date_format))
    else:
        console_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    app_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        app_logger.addHandler(file_handler)

    app_logger.propagate = False

    app_logger.debug(f"Logging initialized (level={logging.getLevelName(app_logger.level)})")
    return app_logger


def set_level(level: Union[str, int]) -> None:
    """Change the level of the ``cardbook`` logger after setup."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(_to_level(level))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``cardbook`` namespace.

    Args:
        name: Typically __name__. Names outside the package (such as
              ``__main__``) are nested under ``cardbook``.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """
    Initialize logging from the ``logging`` section of the configuration.

    Returns:
        Configured application logger.
    """
    from config import get_config

    log_file = None
    if get_config("logging.file.enabled", False):
        log_file = get_config("logging.file.path")

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", 1048576),
        backup_count=get_config("logging.file.backup_count", 3),
        colorize=get_config("logging.console.colorize", True)
    )
