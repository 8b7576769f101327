"""
Logging configuration for seqscope.

The library only installs a NullHandler on import; applications call
setup_logging() once to get console output and, optionally, a JSON log file.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from seqscope.config import get_settings

ROOT_LOGGER_NAME = "seqscope"


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "job_id"):
            log_data["job_id"] = record.job_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class PlainFormatter(logging.Formatter):
    """Format log records as plain text for console output"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Path] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Configure the seqscope logger.

    Args:
        level: Console logging level (name or number); defaults to
            Settings.log_level
        log_file: Optional path for a DEBUG-level log file
        json_format: Write the log file as JSON lines

    Returns:
        The configured seqscope logger
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(PlainFormatter())
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter() if json_format else PlainFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the seqscope logger, e.g. get_logger('worker')."""
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
