"""Logging helpers for the ``elevator`` and ``server`` packages.

Both packages are silent by default (``NullHandler``). Call
:func:`enable_console_logging` or :func:`configure_from_env` to see output.

Environment variables:
    LIFTCAR_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Literal, Union

__all__ = ["configure_from_env", "enable_console_logging", "set_level"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOGGER_NAMES = ("elevator", "server")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _resolve(level: Union[LogLevel, int, str]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def set_level(level: Union[LogLevel, int]) -> None:
    for name in LOGGER_NAMES:
        logging.getLogger(name).setLevel(_resolve(level))


def enable_console_logging(level: Union[LogLevel, int] = "INFO", fmt: str = DEFAULT_FORMAT) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DEFAULT_DATE_FORMAT))
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.addHandler(handler)
        logger.setLevel(_resolve(level))
    return handler


def configure_from_env() -> None:
    level = os.environ.get("LIFTCAR_LOGGING")
    if level:
        enable_console_logging(level)
