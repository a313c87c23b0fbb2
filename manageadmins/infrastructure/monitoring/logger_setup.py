"""Centralized logging configuration for the manageadmins application.

Sets up standard Python logging with the configured level, formatter,
and handlers (stderr console, optional file). Command results are printed
to stdout by the display, so log records stay on stderr.
"""

import logging
import sys
from typing import Optional

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = None


def resolve_log_level(level_name: Optional[str], verbose: bool = False) -> int:
    """Maps a level name from configuration to a logging level; --verbose wins."""
    if verbose:
        return logging.DEBUG
    if not level_name:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(str(level_name).upper())
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = DEFAULT_LOG_FILE
) -> None:
    """Configures the root logger for the application.

    Args:
        log_level: The minimum logging level (e.g., logging.DEBUG, logging.INFO).
        log_format: The format string for log messages.
        log_file: Optional path to a file for logging output.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers attached to the root logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            logging.error(f"Failed to set up file logging to {log_file}: {e}")
        else:
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            logging.info(f"Logging to file: {log_file}")

    # httpx logs every request at INFO; keep it quiet unless debugging.
    http_level = log_level if log_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("httpx").setLevel(http_level)
    logging.getLogger("httpcore").setLevel(http_level)

    logging.debug(f"Logging configured. Level={logging.getLevelName(log_level)}")
