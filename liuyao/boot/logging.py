"""Logging helpers for liuyao entry points."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["LOG_LEVEL_ENV", "configure_logging"]

LOG_LEVEL_ENV = "LIUYAO_LOG_LEVEL"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _coerce_level(value: str | int | None, fallback: int = logging.WARNING) -> int:
    """Return a logging level derived from ``value``.

    Accepts the standard level names (case insensitive) or a numeric level.
    Anything else yields ``fallback``.
    """

    if value is None:
        return fallback

    if isinstance(value, int):
        return value

    candidate = value.strip()
    if not candidate:
        return fallback

    if candidate.isdigit():
        return int(candidate)

    resolved = logging.getLevelName(candidate.upper())
    if isinstance(resolved, int):
        return resolved

    return fallback


def configure_logging(*, level: str | int | None = None, **kwargs: Any) -> int:
    """Configure the root logger and return the effective level.

    When ``level`` is omitted the ``LIUYAO_LOG_LEVEL`` environment variable
    is consulted. ``kwargs`` are forwarded to :func:`logging.basicConfig`.
    """

    env_level: str | int | None
    if level is None:
        env_level = os.environ.get(LOG_LEVEL_ENV)
    else:
        env_level = level

    effective_level = _coerce_level(env_level)

    logging.basicConfig(
        level=effective_level,
        format=kwargs.pop("format", _DEFAULT_FORMAT),
        datefmt=kwargs.pop("datefmt", _DEFAULT_DATEFMT),
        force=kwargs.pop("force", True),
        **kwargs,
    )

    return effective_level
