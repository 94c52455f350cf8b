"""
Logging utilities for the Students API.

Handlers and format are set up once, on the root logger, by
configure_logging(). Module loggers only name themselves and inherit the
level of the "students_api" package logger, so LOG_LEVEL applies to every
module at once.

RULES:
- NEVER log raw request bodies (they carry student e-mail addresses)
- Log high-level events only (e.g., "creating a student", "shutting down the server")
- Error messages are logged without stack traces unless the failure is unexpected
"""

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "students_api"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get the logger for a module.

    Args:
        name: Module name (typically __name__)
        level: Optional level override for this logger only. When omitted
               the level is inherited from the package logger.

    Usage:
        >>> from students_api.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("server started")
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level name ("warning", "INFO", "trace") into its number.

    Raises:
        ValueError: If the name is not a registered logging level
    """
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level}")
    return resolved


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root handler once and apply `level` to the whole package."""
    level = resolve_level(level)

    logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
