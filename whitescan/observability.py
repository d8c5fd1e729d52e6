"""Centralised logging helpers for whitescan."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union

from .config import get_settings

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = "whitescan") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a console handler to the ``whitescan`` logger.

    The level comes from ``level`` when given, else from the configured
    ``log_level`` setting.
    """

    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = get_logger()
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


__all__ = ["get_logger", "configure_logging"]
