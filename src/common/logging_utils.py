"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module owns
the root handler setup and the structured ``extra=`` payload conventions used
for DEBUG traces (event, component, action, outcome, ...).
"""
from __future__ import annotations

import json
import logging
import os
import re
import sys
import time
import urllib.parse
from typing import Any, Dict, Optional

from constants import Constants

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_SENSITIVE_QUERY_KEYS = re.compile(r"(token|secret|password|auth|key)", re.IGNORECASE)


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line, including extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging() -> None:
    """Install a single stderr handler on the root logger.

    Level comes from CREATE_PACKAGE_LOG_LEVEL (default WARNING) and format from
    CREATE_PACKAGE_LOG_FMT ("human" or "json"). Safe to call repeatedly.
    """
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.WARNING)
    fmt = os.environ.get(Constants.ENV_LOG_FMT, "human").lower()

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_create_package_handler", False):
            root.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    handler._create_package_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)


def add_file_handler(path: str) -> logging.Handler:
    """Mirror log output into a file."""
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    file_handler._create_package_handler = True  # type: ignore[attr-defined]
    logging.getLogger().addHandler(file_handler)
    return file_handler


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` dict, dropping None values."""
    return {key: value for key, value in fields.items() if value is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    return logger.isEnabledFor(logging.DEBUG)


def redact(value: Optional[str]) -> str:
    if not value:
        return ""
    return "[REDACTED]"


def safe_url(url: str) -> str:
    """Strip credentials and sensitive query values from a URL for logging."""
    try:
        parts = urllib.parse.urlsplit(url)
    except ValueError:
        return url
    netloc = parts.netloc
    if "@" in netloc:
        netloc = "[REDACTED]@" + netloc.rsplit("@", 1)[1]
    query = parts.query
    if query:
        pairs = urllib.parse.parse_qsl(query, keep_blank_values=True)
        query = "&".join(
            f"{k}={redact(v) if _SENSITIVE_QUERY_KEYS.search(k) else v}" for k, v in pairs
        )
    return urllib.parse.urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        if self._start is None:
            return 0
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
