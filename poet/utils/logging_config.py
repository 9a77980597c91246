"""Helpers for configuring consistent project logging output."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "POET_LOG_LEVEL"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_NOISY_LOGGERS = ("urllib3", "httpx", "httpcore")
_CONFIGURED = False


def resolve_level(level: str | int | None) -> int:
    """Turn ``"debug"``, ``"10"`` or ``logging.DEBUG`` into a logging level."""

    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        resolved = logging.getLevelName(normalized)
        return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str | int] = None, *, force: bool = False) -> int:
    """Install the root handler used by the command line and the web UI.

    The level comes from ``level`` or, when omitted, from ``POET_LOG_LEVEL``.
    Chatty HTTP client loggers are capped at ``WARNING`` unless debugging.
    Returns the level that was applied.
    """

    global _CONFIGURED

    env_level = os.environ.get(LOG_LEVEL_ENV)
    resolved_level = resolve_level(level if level is not None else env_level)

    if _CONFIGURED and not force:
        return resolved_level

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("poet").setLevel(resolved_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))
    _CONFIGURED = True
    return resolved_level


__all__ = ["LOG_LEVEL_ENV", "configure_logging", "resolve_level"]
