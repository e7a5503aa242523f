"""Centralized logging configuration for the server."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from core.exceptions import ConfigurationError

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error")


def resolve_level(raw_level: str | None) -> str:
    """Normalize a level name, defaulting to INFO.

    Raises:
        ConfigurationError: If the name is not a standard logging level.
    """
    resolved = (raw_level or "INFO").strip().upper()
    if resolved not in logging.getLevelNamesMapping():
        raise ConfigurationError(f"Unknown log level: {raw_level!r}")
    return resolved


def configure_logging(
    *,
    level: str | None = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    access_log: bool | None = None,
    extra_loggers: Iterable[str] | None = None,
) -> logging.Logger:
    """Configure application logging once per process.

    Args:
        level: Explicit log level. Falls back to ``FISHFIGHT_LOG_LEVEL`` or INFO.
        format: Log format string.
        datefmt: Date format string.
        access_log: Keep uvicorn's per-request access log. Falls back to
            ``FISHFIGHT_ACCESS_LOG`` (default on); off raises it to WARNING.
        extra_loggers: Additional logger names aligned with the level.

    Returns:
        The application logger (``fishfight.backend``).
    """
    resolved_level = resolve_level(level if level is not None else os.getenv("FISHFIGHT_LOG_LEVEL"))
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    app_logger = logging.getLogger("fishfight.backend")
    app_logger.setLevel(resolved_level)

    for name in (*_UVICORN_LOGGERS, *(extra_loggers or ())):
        logging.getLogger(name).setLevel(resolved_level)

    if access_log is None:
        access_log = os.getenv("FISHFIGHT_ACCESS_LOG", "true").lower() != "false"
    logging.getLogger("uvicorn.access").setLevel(resolved_level if access_log else logging.WARNING)

    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
