"""Centralised logging configuration for BudgetTrack.

Library modules only call ``get_logger("budgettrack.<module>")``. Handlers are
attached once, by the application entrypoint, through ``configure_logging``.
Until then the package root logger carries a ``NullHandler`` so library use
stays silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]

LOGGER_NAME = "budgettrack"
_CONFIGURED = False


def _level_from_name(name: str) -> int | None:
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = _level_from_name(level)
        if numeric is not None:
            return numeric
    # Env override when the explicit level is missing or unrecognised
    env_val = os.getenv("BUDGETTRACK_LOG_LEVEL")
    if env_val:
        numeric = _level_from_name(env_val)
        if numeric is not None:
            return numeric
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single ``StreamHandler`` to the package root logger.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level name. ``None`` falls back to the
        ``BUDGETTRACK_LOG_LEVEL`` environment variable, then ``INFO``.
    fmt:
        Optional format string.
    stream:
        Output stream for the handler (``sys.stderr`` by default).
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, keeping the package root silent until configured."""

    pkg_logger = logging.getLogger(LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
