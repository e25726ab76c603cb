"""Logging configuration helpers."""

from __future__ import annotations

import logging

from banner_server.core.config import Settings


def _resolve_level(level_name: str) -> int:
    return getattr(logging, level_name.upper(), logging.INFO)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from the ``logging`` settings section.

    Safe to call more than once; when handlers already exist (uvicorn, pytest)
    only their level and formatter are adjusted.
    """
    level = _resolve_level(settings.logging.level)
    formatter = logging.Formatter(settings.logging.format)
    root_logger = logging.getLogger()

    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
        return

    logging.basicConfig(level=level)
    for handler in logging.getLogger().handlers:
        handler.setFormatter(formatter)
