"""Helpers for safe debug logging.

The feed URL carries the API key as a query parameter, and raw frames can
be large or echo the key back. Both are redacted before they reach the logs.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset({"key", "api_key", "apikey", "token"})


def _is_sensitive(name: str) -> bool:
    return name.lower() in _SENSITIVE_KEYS


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}…<truncated>"


def redact_url(url: str) -> str:
    """Return *url* with sensitive query parameters replaced."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (name, REDACTED if _is_sensitive(name) else value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="<>")))


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return {name: REDACTED if _is_sensitive(str(name)) else _scrub(item) for name, item in value.items()}
    if isinstance(value, list):
        return [_scrub(item) for item in value]
    return value


def redact_frame(frame: str, *, max_length: int = 512) -> str:
    """Return a log-safe rendition of one raw frame.

    Frames that still parse as JSON have sensitive keys replaced at any
    depth and are re-serialized compactly. Anything else is only truncated.
    """
    try:
        parsed = json.loads(frame)
    except ValueError:
        return _truncate(frame, max_length)
    return _truncate(json.dumps(_scrub(parsed), separators=(",", ":"), ensure_ascii=False), max_length)
