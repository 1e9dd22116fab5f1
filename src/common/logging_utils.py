"""Centralized logging helpers.

Provides a single place to configure root logging for the CLI, plus small
helpers used by the HTTP and resolution layers to emit structured DEBUG
traces without leaking credentials.
"""
from __future__ import annotations

import logging
import os
import re
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_QUERY_RE = re.compile(r"(?i)(token|access_token|private_token|password)=([^&]+)")


def configure_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure root logging once for the process.

    Level resolution order: explicit argument, M2T_LOG_LEVEL, M2T_DEBUG, INFO.
    Log records always go to stderr so stdout stays reserved for tuples.
    """
    if level is None:
        level = os.environ.get(Constants.ENV_LOG_LEVEL)
    if level is None and os.environ.get(Constants.ENV_DEBUG):
        level = "DEBUG"
    level_value = getattr(logging, str(level or "INFO").upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def redact(text: str) -> str:
    """Mask token-like query parameters in text."""
    if not text:
        return text
    return _SENSITIVE_QUERY_RE.sub(r"\1=***", text)


def safe_url(url: str) -> str:
    """Return url with userinfo removed and sensitive query values masked."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return redact(url)
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return redact(urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment)))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
