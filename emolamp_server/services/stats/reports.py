"""JSON payloads served under ``/api/stats``.

Each report takes snapshots from the stores once and hands them to the pure
aggregate functions, so a report never sees a store mid-mutation.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, List, Sequence

from ...models import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_SATURATION,
    EmotionEntry,
    LogCategory,
    ManualStateEntry,
    StateEntry,
    WeatherEntry,
)
from ...utils.timezones import local_datetime
from ..lamp_state import CurrentState
from ..log_store import LogStore
from .aggregates import (
    average_interval,
    distribution,
    dominant,
    filter_today,
    format_interval,
    hourly_timeline,
    longest_streak,
    mode_ratio,
    top_transitions,
)
from .colors import average_level, hue_histogram, top_colors
from .correlation import DEFAULT_WINDOW_MINUTES, weather_emotion_correlation, weather_summary
from .patterns import BucketSummary, day_of_week_pattern, time_of_day_pattern


def _emotions(store: LogStore) -> List[EmotionEntry]:
    return store.snapshot(LogCategory.EMOTION)


def _weather(store: LogStore) -> List[WeatherEntry]:
    return store.snapshot(LogCategory.WEATHER)


def _states(store: LogStore) -> List[StateEntry]:
    return store.snapshot(LogCategory.STATE)


def _manual_states(store: LogStore) -> List[ManualStateEntry]:
    return store.snapshot(LogCategory.MANUAL_STATE)


def _streak(emotions: Sequence[EmotionEntry]) -> Dict[str, Any] | None:
    streak = longest_streak([entry.emotion for entry in emotions])
    return {"emotion": streak[0], "count": streak[1]} if streak else None


def _dominant_emotion(emotions: Sequence[EmotionEntry]) -> str | None:
    top = dominant([entry.emotion for entry in emotions])
    return top[0] if top else None


def _buckets(summaries: Sequence[BucketSummary], label_key: str) -> List[Dict[str, Any]]:
    return [
        {
            label_key: summary.label,
            "count": summary.count,
            "dominantEmotion": summary.dominant,
            "percentage": summary.percentage,
        }
        for summary in summaries
    ]


def today_report(store: LogStore, tz: tzinfo, now: int) -> Dict[str, Any]:
    emotions = filter_today(_emotions(store), now, tz)
    weather = filter_today(_weather(store), now, tz)
    states = filter_today(_states(store), now, tz)
    manual = filter_today(_manual_states(store), now, tz)
    return {
        "date": local_datetime(now, tz).date().isoformat(),
        "totalEmotions": len(emotions),
        "totalWeather": len(weather),
        "totalStateChanges": len(states),
        "totalManualStates": len(manual),
        "dominantEmotion": _dominant_emotion(emotions),
        "distribution": distribution([entry.emotion for entry in emotions], key="emotion"),
        "modeRatio": mode_ratio(states),
    }


def emotions_report(store: LogStore) -> Dict[str, Any]:
    emotions = _emotions(store)
    return {
        "total": len(emotions),
        "dominantEmotion": _dominant_emotion(emotions),
        "distribution": distribution([entry.emotion for entry in emotions], key="emotion"),
    }


def timeline_report(store: LogStore, tz: tzinfo, now: int) -> Dict[str, Any]:
    emotions = filter_today(_emotions(store), now, tz)
    hours = []
    for bucket in hourly_timeline(emotions, tz):
        last = bucket.last
        hours.append(
            {
                "hour": bucket.hour,
                "emotion": last.emotion if last else None,
                "hue": last.hue if last else None,
                "colorHex": last.color_hex if last else None,
                "count": bucket.count,
            }
        )
    return {"date": local_datetime(now, tz).date().isoformat(), "hours": hours}


def summary_report(store: LogStore, current: CurrentState) -> Dict[str, Any]:
    emotions = _emotions(store)
    states = _states(store)
    counts = store.counts()
    timestamps = [
        entry.timestamp
        for category in LogCategory
        for entry in store.snapshot(category)
    ]
    return {
        "totalLogs": sum(counts.values()),
        "counts": counts,
        "dominantEmotion": _dominant_emotion(emotions),
        "longestStreak": _streak(emotions),
        "averageInterval": format_interval(average_interval(entry.timestamp for entry in emotions)),
        "modeRatio": mode_ratio(states),
        "currentMode": current.get().mode,
        "firstLogAt": min(timestamps) if timestamps else None,
        "lastLogAt": max(timestamps) if timestamps else None,
    }


def recent_report(store: LogStore, limit: int) -> Dict[str, Any]:
    def latest(category: LogCategory) -> List[Dict[str, Any]]:
        return [entry.as_wire() for entry in store.latest(category, limit)]

    return {
        "limit": limit,
        "emotions": latest(LogCategory.EMOTION),
        "weather": latest(LogCategory.WEATHER),
        "states": latest(LogCategory.STATE),
        "manualStates": latest(LogCategory.MANUAL_STATE),
    }


def current_report(current: CurrentState) -> Dict[str, Any]:
    return current.get().as_wire()


def advanced_report(store: LogStore) -> Dict[str, Any]:
    emotions = _emotions(store)
    names = [entry.emotion for entry in emotions]
    return {
        "totalEmotions": len(emotions),
        "longestStreak": _streak(emotions),
        "transitions": [
            {"from": previous, "to": current, "count": count}
            for previous, current, count in top_transitions(names)
        ],
        "averageInterval": format_interval(average_interval(entry.timestamp for entry in emotions)),
        "modeRatio": mode_ratio(_states(store)),
    }


def weather_correlation_report(store: LogStore, window_minutes: int = DEFAULT_WINDOW_MINUTES) -> Dict[str, Any]:
    correlations = weather_emotion_correlation(_emotions(store), _weather(store), window_minutes)
    return {
        "windowMinutes": window_minutes,
        "matched": sum(item["count"] for item in correlations),
        "correlations": correlations,
    }


def time_patterns_report(store: LogStore, tz: tzinfo) -> Dict[str, Any]:
    emotions = _emotions(store)
    return {
        "timeOfDay": _buckets(time_of_day_pattern(emotions, tz), "period"),
        "dayOfWeek": _buckets(day_of_week_pattern(emotions, tz), "day"),
    }


def color_analysis_report(store: LogStore) -> Dict[str, Any]:
    emotions = _emotions(store)
    manual = _manual_states(store)
    samples = [*emotions, *manual]
    return {
        "totalSamples": len(samples),
        "hueHistogram": hue_histogram(entry.hue for entry in emotions),
        "topColors": top_colors(entry.color_hex for entry in samples),
        "averageSaturation": average_level((entry.saturation for entry in samples), DEFAULT_SATURATION),
        "averageBrightness": average_level((entry.brightness for entry in samples), DEFAULT_BRIGHTNESS),
    }


def weather_report(store: LogStore) -> Dict[str, Any]:
    return weather_summary(_weather(store))


__all__ = [
    "advanced_report",
    "color_analysis_report",
    "current_report",
    "emotions_report",
    "recent_report",
    "summary_report",
    "time_patterns_report",
    "timeline_report",
    "today_report",
    "weather_correlation_report",
    "weather_report",
]
