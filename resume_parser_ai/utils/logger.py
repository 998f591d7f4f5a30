"""Logging configuration for the resume parser."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance; level defaults to LOG_LEVEL from env."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel((os.getenv("LOG_LEVEL") or "INFO").strip().upper())
    if level is not None:
        logger.setLevel(level)
    return logger
