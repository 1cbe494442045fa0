"""
tabtrace/config.py

Centralized environment variable configuration.
"""

import logging
import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def resolve_log_level(name: str) -> int:
    """
    Map a level name (case-insensitive) to its numeric level; unknown names give INFO.
    """
    return logging.getLevelNamesMapping().get(name.strip().upper(), logging.INFO)


class Config():
    """
    Centralized configuration for environment variables.
    """

    # logging
    LOG_LEVEL: int = resolve_log_level(os.getenv("TABTRACE_LOG_LEVEL", "INFO"))
    LOG_FORMAT: str = os.getenv("TABTRACE_LOG_FORMAT", "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s")
    LOG_DATE_FORMAT: str = os.getenv("TABTRACE_LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")

    # output
    DEFAULT_OUTPUT_DIR: str = os.getenv("TABTRACE_OUTPUT_DIR", "./tabtrace_captures")

    @classmethod
    def as_dict(cls) -> dict[str, Any]:
        """
        Return a dictionary of all UPPERCASE class attributes and their values.
        Return:
            dict[str, Any]: A dictionary of all UPPERCASE class attributes and their values.
        """
        return {
            key: getattr(cls, key)
            for key in dir(cls)
            if key.isupper()
        }
