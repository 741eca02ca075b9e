"""Shared helpers for working with the configured calendar timezone."""

from __future__ import annotations

import time
from datetime import datetime, timezone, tzinfo

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..logging_config import logger

UTC = timezone.utc


def now_ms() -> int:
    """Current wall-clock time as milliseconds since the epoch."""
    return int(time.time() * 1000)


def resolve_timezone(name: str = "local") -> tzinfo:
    """Resolve a configured timezone name, falling back to UTC on error.

    ``local`` (or an empty value) maps to the zone of the server process.
    """

    candidate = (name or "").strip()
    if not candidate or candidate.lower() == "local":
        local = datetime.now().astimezone().tzinfo
        return local if local is not None else UTC
    if candidate.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "unknown timezone; defaulting to UTC",
            extra={"timezone": candidate},
        )
    return UTC


def local_datetime(timestamp_ms: int, tz: tzinfo) -> datetime:
    """Convert an epoch-milliseconds timestamp into an aware datetime in *tz*."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=tz)


def hour_of(timestamp_ms: int, tz: tzinfo) -> int:
    return local_datetime(timestamp_ms, tz).hour


def start_of_day_ms(now: int, tz: tzinfo) -> int:
    """Epoch milliseconds of local midnight for the day containing *now*."""
    current = local_datetime(now, tz)
    midnight = current.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp() * 1000)


__all__ = [
    "UTC",
    "hour_of",
    "local_datetime",
    "now_ms",
    "resolve_timezone",
    "start_of_day_ms",
]
