"""
Logging setup.

Every module logs through ``logging.getLogger(__name__)``; this module
attaches a single stream handler to the ``jobboard`` parent logger.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger once and return it."""
    logger = logging.getLogger("jobboard")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
