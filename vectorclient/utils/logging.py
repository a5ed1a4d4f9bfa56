"""
Logging utilities for vectorclient.
"""

import logging
import sys
from typing import Optional


# Default format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Module-level logger cache
_loggers: dict = {}


def setup_logger(
    name: str = "vectorclient",
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        log_file: Optional file path for logging

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _loggers[name] = logger

    return logger


def get_logger(name: str = "vectorclient") -> logging.Logger:
    """
    Get a logger by name.

    Loggers below the ``vectorclient`` namespace propagate to the package
    logger instead of getting their own handlers.

    Args:
        name: Logger name

    Returns:
        Logger instance (creates default if not exists)
    """
    if name in _loggers:
        return _loggers[name]
    if name.startswith("vectorclient."):
        return logging.getLogger(name)
    return setup_logger(name)


def set_level(level: str, name: str = "vectorclient") -> None:
    """Change the level of an already configured logger."""
    get_logger(name).setLevel(getattr(logging, level.upper()))
