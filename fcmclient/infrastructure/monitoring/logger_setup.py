"""Centralized logging configuration for applications embedding fcmclient.

The library itself only creates module loggers. Host applications may call
``setup_logging`` once at startup to get console (and optional file)
output with a consistent format.
"""

import logging
import sys
from typing import Optional, Union

from fcmclient.infrastructure.config import settings

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = None


def setup_logging(
    log_level: Optional[Union[int, str]] = None,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = DEFAULT_LOG_FILE
) -> None:
    """Configures the root logger.

    Args:
        log_level: Minimum level as a number or name (e.g. logging.DEBUG or "DEBUG").
            Read from the ``logging.level`` setting when None.
        log_format: The format string for log messages.
        log_file: Optional path to a file for logging output.
    """
    if log_level is None:
        log_level = settings.get_log_level()
    if isinstance(log_level, str):
        resolved = logging.getLevelName(log_level.upper())
        # getLevelName returns "Level X" for unknown names
        log_level = resolved if isinstance(resolved, int) else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers attached to the root logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            logging.info(f"Logging to file: {log_file}")
        except OSError as e:
            logging.error(f"Failed to set up file logging to {log_file}: {e}", exc_info=True)

    logging.info(f"Logging configured. Level={logging.getLevelName(log_level)}")
