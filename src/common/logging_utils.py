"""Centralized logging helpers.

Provides the root logging setup for the CLI and a few helpers used by the
registry client and the resolution service to emit structured DEBUG traces:

- configure_logging(): install a single stream handler on the root logger
- extra_context(): build an ``extra=`` mapping with stable field names
- is_debug_enabled(): cheap guard around DEBUG-only payload construction
- safe_url(): strip credentials and query strings before logging a URL
- Timer: context manager measuring elapsed milliseconds
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_CONFIGURED_MARKER = "_range_resolver_handler"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once.

    The level comes from ``level`` when given, else from the
    RANGE_RESOLVER_LOG_LEVEL environment variable, else INFO.
    """
    level_name = (level or os.environ.get(Constants.LOG_LEVEL_ENV) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger()
    root.setLevel(level_value)

    for handler in root.handlers:
        if getattr(handler, _CONFIGURED_MARKER, False):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    setattr(handler, _CONFIGURED_MARKER, True)
    root.addHandler(handler)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Return a logging ``extra`` mapping, dropping fields that are None."""
    return {k: v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def safe_url(url: str) -> str:
    """Return ``url`` without userinfo, query or fragment."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds, up to now if the block is still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
