"""Calendar buckets: time of day and day of week."""

from __future__ import annotations

from datetime import tzinfo
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence

from ...models import EmotionEntry
from ...utils.timezones import local_datetime
from .aggregates import dominant, round_percent

# (name, first hour, end hour); anything outside falls into "night"
DAY_PERIODS = (
    ("morning", 6, 12),
    ("afternoon", 12, 18),
    ("evening", 18, 22),
)
NIGHT = "night"
PERIOD_NAMES = tuple(name for name, _, _ in DAY_PERIODS) + (NIGHT,)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class BucketSummary(NamedTuple):
    label: str
    count: int
    dominant: Optional[str]
    percentage: int


def period_of(hour: int) -> str:
    for name, start, end in DAY_PERIODS:
        if start <= hour < end:
            return name
    return NIGHT


def _summarize(labels: Sequence[str], grouped: Dict[str, List[str]]) -> List[BucketSummary]:
    summaries = []
    for label in labels:
        values = grouped[label]
        top = dominant(values)
        summaries.append(
            BucketSummary(
                label=label,
                count=len(values),
                dominant=top[0] if top else None,
                percentage=round_percent(top[1], len(values)) if top else 0,
            )
        )
    return summaries


def _bucket(
    entries: Iterable[EmotionEntry],
    labels: Sequence[str],
    label_for: Callable[[EmotionEntry], str],
) -> List[BucketSummary]:
    grouped: Dict[str, List[str]] = {label: [] for label in labels}
    for entry in entries:
        grouped[label_for(entry)].append(entry.emotion)
    return _summarize(labels, grouped)


def time_of_day_pattern(entries: Iterable[EmotionEntry], tz: tzinfo) -> List[BucketSummary]:
    return _bucket(entries, PERIOD_NAMES, lambda entry: period_of(local_datetime(entry.timestamp, tz).hour))


def day_of_week_pattern(entries: Iterable[EmotionEntry], tz: tzinfo) -> List[BucketSummary]:
    return _bucket(entries, WEEKDAYS, lambda entry: WEEKDAYS[local_datetime(entry.timestamp, tz).weekday()])


__all__ = [
    "BucketSummary",
    "DAY_PERIODS",
    "PERIOD_NAMES",
    "WEEKDAYS",
    "day_of_week_pattern",
    "period_of",
    "time_of_day_pattern",
]
