"""Logging setup for docwright.

All modules log through children of the ``docwright`` logger. Progress
messages go to stderr so command output on stdout stays clean; a log
file can be added from config.yaml.
"""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "docwright"


def setup_logging(
    level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the package logger with console and optional file output.

    Clears handlers from any previous call so repeated CLI invocations in
    one process do not duplicate records.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        log_format: Format string for log records.
        log_file: Optional file path that also receives log records.
        stream: Console stream. Defaults to stderr.

    Returns:
        The configured ``docwright`` logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    package_logger.setLevel(numeric_level)
    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.debug("Logging initialized at level %s", level)
    return package_logger
