"""Logging setup for the ``clipmark`` logger hierarchy.

Stdout carries the converted note, so console records go to stderr.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the ``clipmark`` logger.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Also append records to this file (timestamped)
        format_string: Format for both handlers, overriding the defaults
        force: Replace handlers installed by an earlier call

    Returns:
        The ``clipmark`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("clipmark")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(format_string or FILE_FORMAT))
            logger.addHandler(file_handler)

    # Records stop here; the root logger belongs to the host application
    logger.propagate = False

    return logger
