"""
Logger configuration for psmio.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname).1s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Configure the psmio logger hierarchy.

    Args:
        level: Logging level, either a logging constant or its name (e.g. "DEBUG")
        log_file: Optional path of a rotating log file
        log_format: Format of the log records
        date_format: Format of the timestamps
        max_file_size: Size in bytes after which the log file is rotated
        backup_count: Number of rotated log files to keep
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger("psmio")
    root_logger.setLevel(level)
    # Handlers below replace the console output of the root logger
    root_logger.propagate = False

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_file_size, backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def configure_from_env() -> dict:
    """Read the logging configuration from PSMIO_LOG_LEVEL and PSMIO_LOG_FILE."""
    config = {"level": os.environ.get("PSMIO_LOG_LEVEL", "INFO")}
    log_file = os.environ.get("PSMIO_LOG_FILE")
    if log_file:
        config["log_file"] = log_file
    return config
