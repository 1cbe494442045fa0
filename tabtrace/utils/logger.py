"""
tabtrace/utils/logger.py

Logger factory for the tabtrace package.
"""

import logging
import sys

from tabtrace.config import Config, resolve_log_level

_PACKAGE_LOGGER_NAME = "tabtrace"


def _configure_package_logger() -> logging.Logger:
    """
    Attach a single stream handler to the package logger (once).
    Returns:
        The configured "tabtrace" logger.
    """
    package_logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=Config.LOG_FORMAT, datefmt=Config.LOG_DATE_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(Config.LOG_LEVEL)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger for the given module name.
    Args:
        name: Usually __name__ of the calling module.
    Returns:
        Logger that propagates to the configured "tabtrace" package logger.
    """
    _configure_package_logger()
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """
    Change the level of the package logger at runtime (used by the CLI).
    """
    _configure_package_logger().setLevel(resolve_log_level(level) if isinstance(level, str) else level)
