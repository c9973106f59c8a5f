"""
Logging setup - one stdout handler for the whole `careers` package.

Modules log through `logging.getLogger(__name__)`; call `setup_logging()`
once at startup.
"""

import logging
import sys
from typing import Optional

from careers.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: settings.log_level)

    Returns:
        The configured `careers` logger
    """
    level = (level or get_settings().log_level).upper()

    logger = logging.getLogger("careers")
    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
