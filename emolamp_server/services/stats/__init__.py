"""Statistics computed on demand from log store snapshots."""

from .aggregates import (
    average_interval,
    distribution,
    dominant,
    filter_today,
    format_interval,
    hourly_timeline,
    longest_streak,
    mode_ratio,
    round_percent,
    top_transitions,
)
from .colors import hue_histogram, top_colors
from .correlation import match_weather, weather_emotion_correlation, weather_summary
from .patterns import day_of_week_pattern, period_of, time_of_day_pattern
from . import reports

__all__ = [
    "average_interval",
    "day_of_week_pattern",
    "distribution",
    "dominant",
    "filter_today",
    "format_interval",
    "hourly_timeline",
    "hue_histogram",
    "longest_streak",
    "match_weather",
    "mode_ratio",
    "period_of",
    "reports",
    "round_percent",
    "time_of_day_pattern",
    "top_colors",
    "top_transitions",
    "weather_emotion_correlation",
    "weather_summary",
]
