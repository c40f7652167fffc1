"""
Logging setup for the service process.
"""

import logging
import sys

LOGGER_NAME = "storefront"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = None) -> logging.Logger:
    """
    Configure the package logger with a single console handler.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The configured ``storefront`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = logging.INFO
    logger.setLevel(log_level)

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)
    logger.propagate = False

    return logger
