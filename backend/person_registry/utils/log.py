"""Logging setup for applications embedding the library.

Library modules only ever call ``logging.getLogger(__name__)``; configuring
handlers is left to the host process, which can call
:func:`configure_logging` once at start-up.
"""

from __future__ import annotations

import logging
from typing import Optional

from person_registry.config import Settings
from person_registry.config import get_settings

# Engine/pool chatter is only interesting when SQL echo was asked for.
_NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def configure_logging(level: str = "INFO", *, sql_echo: bool = False) -> None:
    """Install a basic stream handler at *level* (unknown names fall back to INFO)."""

    try:
        log_level = getattr(logging, level.upper())
    except AttributeError:
        log_level = logging.INFO
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(level=log_level, format="%(levelname)s - %(message)s", handlers=[logging.StreamHandler()])

    if not sql_echo:
        for noisy in _NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)


def configure_from_settings(settings: Optional[Settings] = None) -> None:
    if settings is None:
        settings = get_settings()
    configure_logging(settings.log_level, sql_echo=settings.sql_echo)


__all__ = ["configure_from_settings", "configure_logging"]
