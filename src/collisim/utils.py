"""
Utility functions shared by the driver and examples.

Holds logging setup, which does not belong to the simulation core.
"""

import logging
import logging.handlers
import os
from typing import Optional

from .constants import LOG_FORMAT, LOG_FILE_MAX_BYTES, LOG_FILE_BACKUPS


def setup_logging(level: str = "INFO", log_file: Optional[str] = None,
                  log_format: str = LOG_FORMAT) -> None:
    """
    Configure the root logger.

    Always logs to the console; also logs to a rotating file
    (1 MB, 5 backups) when ``log_file`` is given.

    Args:
        level: Logging level name, e.g. "INFO" or "DEBUG"
        log_file: Optional path of the rotating log file
        log_format: Record format string
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Avoid duplicate handlers when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.debug(f"Log level set to {level.upper()}.")
    if log_file:
        logging.debug(f"Log file path: {log_file}")
