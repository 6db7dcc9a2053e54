"""Logging setup shared by every Resmo module."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = os.getenv("RESMO_LOG_LEVEL", "INFO").upper()


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a stdout logger for ``name``; handlers are attached only once."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(DEFAULT_LEVEL)
    if level is not None:
        logger.setLevel(level)
    return logger
