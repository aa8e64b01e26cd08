"""
bootstrap/logging_setup.py - Logging configuration

The library itself only creates module loggers; applications call
setup_logging once at startup.
"""

from __future__ import annotations
from typing import Optional
import json
import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        })


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the ``phaseflow`` logger hierarchy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs

    Returns:
        The configured ``phaseflow`` logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JSONFormatter() if json_format else logging.Formatter(fmt)

    package_logger = logging.getLogger("phaseflow")
    package_logger.setLevel(log_level)

    # Re-running setup replaces our handlers instead of stacking them
    for handler in list(package_logger.handlers):
        if getattr(handler, "_phaseflow_handler", False):
            package_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    console_handler._phaseflow_handler = True
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        file_handler._phaseflow_handler = True
        package_logger.addHandler(file_handler)

    return package_logger
