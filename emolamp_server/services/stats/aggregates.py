"""Order- and count-based aggregates over log snapshots.

Every function here is pure: it reads the sequences it is given and returns
fresh values. Insertion order is the order of the input sequence; callers
sort first where time order matters.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import tzinfo
from typing import Any, Dict, Hashable, Iterable, List, NamedTuple, Optional, Sequence, Tuple, TypeVar

from ...models import MODE_AUTO, MODE_MANUAL, LogEntry, StateEntry
from ...utils.timezones import hour_of, start_of_day_ms

T = TypeVar("T", bound=Hashable)
E = TypeVar("E", bound=LogEntry)

INSUFFICIENT_DATA = "insufficient data"
MODE_CHANGE_ACTION = "mode_change"

_HOUR_MS = 60 * 60 * 1000
_MINUTE_MS = 60 * 1000


def round_percent(part: int, total: int) -> int:
    """Percentage rounded half-up; ``0`` when *total* is zero."""
    if total <= 0:
        return 0
    return int(math.floor(part * 100 / total + 0.5))


def filter_today(entries: Iterable[E], now: int, tz: tzinfo) -> List[E]:
    start = start_of_day_ms(now, tz)
    return [entry for entry in entries if entry.timestamp >= start]


def distribution(values: Sequence[T], *, key: str = "value") -> List[Dict[str, Any]]:
    """Count and percentage per distinct value, most frequent first.

    Ties keep the order in which values first appeared.
    """

    total = len(values)
    return [
        {key: value, "count": count, "percentage": round_percent(count, total)}
        for value, count in Counter(values).most_common()
    ]


def dominant(values: Sequence[T]) -> Optional[Tuple[T, int]]:
    if not values:
        return None
    return Counter(values).most_common(1)[0]


def longest_streak(values: Sequence[T]) -> Optional[Tuple[T, int]]:
    """Longest run of identical consecutive values; the first such run wins ties."""
    best: Optional[Tuple[T, int]] = None
    run_value: Optional[T] = None
    run_length = 0
    for index, value in enumerate(values):
        if index > 0 and value == run_value:
            run_length += 1
        else:
            run_value, run_length = value, 1
        if best is None or run_length > best[1]:
            best = (value, run_length)
    return best


def top_transitions(values: Sequence[T], limit: int = 5) -> List[Tuple[T, T, int]]:
    """Most frequent ``previous -> current`` changes between adjacent values."""
    pairs: Counter = Counter(
        (previous, current) for previous, current in zip(values, values[1:]) if previous != current
    )
    return [(previous, current, count) for (previous, current), count in pairs.most_common(limit)]


def average_interval(timestamps: Iterable[int]) -> Optional[int]:
    """Mean gap in milliseconds between consecutive timestamps, ``None`` below two."""
    ordered = sorted(timestamps)
    if len(ordered) < 2:
        return None
    deltas = [later - earlier for earlier, later in zip(ordered, ordered[1:])]
    return int(round(sum(deltas) / len(deltas)))


def format_interval(interval_ms: Optional[int]) -> Dict[str, Any]:
    if interval_ms is None:
        return {"averageMs": None, "hours": None, "minutes": None, "formatted": INSUFFICIENT_DATA}
    hours, remainder = divmod(interval_ms, _HOUR_MS)
    minutes = remainder // _MINUTE_MS
    return {
        "averageMs": interval_ms,
        "hours": hours,
        "minutes": minutes,
        "formatted": f"{hours}:{minutes:02d}",
    }


def mode_ratio(entries: Iterable[StateEntry]) -> Dict[str, Any]:
    """AUTO versus MANUAL among mode changes; percentages round independently."""
    modes = [entry.mode for entry in entries if entry.action == MODE_CHANGE_ACTION]
    auto = sum(1 for mode in modes if mode == MODE_AUTO)
    manual = sum(1 for mode in modes if mode == MODE_MANUAL)
    total = auto + manual
    return {
        "total": total,
        "auto": {"count": auto, "percentage": round_percent(auto, total)},
        "manual": {"count": manual, "percentage": round_percent(manual, total)},
    }


class HourBucket(NamedTuple):
    hour: int
    last: Optional[Any]
    count: int


def hourly_timeline(entries: Iterable[E], tz: tzinfo) -> List[HourBucket]:
    """Twenty-four buckets, each holding the last entry of its hour and a count."""
    last: List[Optional[E]] = [None] * 24
    counts = [0] * 24
    for entry in sorted(entries, key=lambda item: item.timestamp):
        hour = hour_of(entry.timestamp, tz)
        last[hour] = entry
        counts[hour] += 1
    return [HourBucket(hour, last[hour], counts[hour]) for hour in range(24)]


__all__ = [
    "HourBucket",
    "INSUFFICIENT_DATA",
    "MODE_CHANGE_ACTION",
    "average_interval",
    "distribution",
    "dominant",
    "filter_today",
    "format_interval",
    "hourly_timeline",
    "longest_streak",
    "mode_ratio",
    "round_percent",
    "top_transitions",
]
