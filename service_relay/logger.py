"""Logging setup for the service_relay demo and embedding applications."""

from __future__ import annotations

import logging

from . import config

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# The HTTP client logs one INFO line per request
_HTTP_LOGGERS = ("httpx", "httpcore")


def setup_logging(level_name: str | None = None, verbose_http: bool = False) -> int:
    """Configure the root logger and return the level that was applied.

    ``level_name`` overrides ``config.LOG_LEVEL``; unknown names fall back
    to INFO. A handler is only attached when the root has none, so hosting
    applications keep their own.
    """
    name = (level_name or config.LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)
    root.setLevel(level)

    http_level = logging.NOTSET if verbose_http else logging.WARNING
    for logger_name in _HTTP_LOGGERS:
        logging.getLogger(logger_name).setLevel(http_level)
    return level


__all__ = ["setup_logging"]
