"""
logger_helper.py - Logging Helpers

Provides module loggers and console logging setup for the entry points
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name

    Args:
        name: Logger name (defaults to this module's name)

    Returns:
        Logger instance
    """
    return logging.getLogger(name or __name__)


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Configure console logging for the seqrename package

    Calling it again only updates the level, no duplicate handlers are added.

    Args:
        level: Console log level

    Returns:
        The package root logger
    """
    logger = logging.getLogger("seqrename")
    logger.setLevel(level)

    if not any(getattr(h, "_seqrename_console", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._seqrename_console = True
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
