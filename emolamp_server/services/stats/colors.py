"""Colour statistics: hue histogram, popular hex colours, average levels."""

from __future__ import annotations

from collections import Counter
from statistics import mean
from typing import Any, Dict, Iterable, List, Optional

from ...models import DEFAULT_HUE
from ...utils.coercion import clamp, coerce_int

HUE_BUCKET_WIDTH = 30
HUE_BUCKETS = 360 // HUE_BUCKET_WIDTH
TOP_COLOR_LIMIT = 10


def normalize_hue(value: Any) -> int:
    return clamp(coerce_int(value, DEFAULT_HUE), 0, 360)


def hue_bucket(value: Any) -> int:
    """Index of the 30-degree bucket for *value*; 360 shares the last bucket."""
    return min(normalize_hue(value) // HUE_BUCKET_WIDTH, HUE_BUCKETS - 1)


def hue_histogram(hues: Iterable[Any]) -> List[Dict[str, Any]]:
    counts = [0] * HUE_BUCKETS
    for hue in hues:
        counts[hue_bucket(hue)] += 1
    return [
        {
            "range": f"{index * HUE_BUCKET_WIDTH}-{(index + 1) * HUE_BUCKET_WIDTH}",
            "start": index * HUE_BUCKET_WIDTH,
            "end": (index + 1) * HUE_BUCKET_WIDTH,
            "count": count,
        }
        for index, count in enumerate(counts)
    ]


def top_colors(colors: Iterable[Optional[str]], limit: int = TOP_COLOR_LIMIT) -> List[Dict[str, Any]]:
    """Most frequent literal hex strings; empty values are skipped."""
    counts = Counter(color for color in colors if color)
    return [{"colorHex": color, "count": count} for color, count in counts.most_common(limit)]


def average_level(values: Iterable[Any], default: int) -> Optional[float]:
    """Mean of percentage levels clamped to 0..100, substituting *default* for junk."""
    levels = [clamp(coerce_int(value, default), 0, 100) for value in values]
    return round(mean(levels), 1) if levels else None


__all__ = [
    "HUE_BUCKETS",
    "HUE_BUCKET_WIDTH",
    "TOP_COLOR_LIMIT",
    "average_level",
    "hue_bucket",
    "hue_histogram",
    "normalize_hue",
    "top_colors",
]
