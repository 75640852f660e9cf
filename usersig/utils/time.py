"""Wall-clock helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from time import time
from typing import Callable

Clock = Callable[[], int]


def unix_now() -> int:
    """Return whole seconds since the epoch."""
    return int(time())


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def utc_now_naive() -> datetime:
    """Return naive UTC now for Postgres timestamp compatibility."""
    return utc_now().replace(tzinfo=None)
