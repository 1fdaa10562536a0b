"""Health and status helpers used by the API."""

from __future__ import annotations

import platform
import time
from datetime import datetime, timezone

_STARTED_AT = time.monotonic()


def get_ping_message() -> str:
    """Return a static ping message."""
    return "pong"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def uptime_seconds() -> float:
    return time.monotonic() - _STARTED_AT


def python_version() -> str:
    return platform.python_version()
