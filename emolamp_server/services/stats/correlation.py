"""Joins between the weather and emotion series."""

from __future__ import annotations

from statistics import mean
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ...models import EmotionEntry, WeatherEntry
from .aggregates import distribution, dominant, round_percent

DEFAULT_WINDOW_MINUTES = 30


def match_weather(
    emotions: Sequence[EmotionEntry],
    weather: Sequence[WeatherEntry],
    window_ms: int,
) -> List[Tuple[EmotionEntry, WeatherEntry]]:
    """Pair each emotion with the first weather entry within *window_ms* of it.

    The first match in store order is used, which is not necessarily the
    closest one. Emotions without a match are left out.
    """

    pairs: List[Tuple[EmotionEntry, WeatherEntry]] = []
    for emotion in emotions:
        for reading in weather:
            if abs(reading.timestamp - emotion.timestamp) <= window_ms:
                pairs.append((emotion, reading))
                break
    return pairs


def weather_emotion_correlation(
    emotions: Sequence[EmotionEntry],
    weather: Sequence[WeatherEntry],
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> List[Dict[str, Any]]:
    groups: Dict[str, List[Tuple[EmotionEntry, WeatherEntry]]] = {}
    for emotion, reading in match_weather(emotions, weather, window_minutes * 60 * 1000):
        groups.setdefault(reading.condition, []).append((emotion, reading))

    results: List[Dict[str, Any]] = []
    for condition, pairs in groups.items():
        names = [emotion.emotion for emotion, _ in pairs]
        top = dominant(names)
        results.append(
            {
                "condition": condition,
                "count": len(pairs),
                "dominantEmotion": top[0] if top else None,
                "percentage": round_percent(top[1], len(pairs)) if top else 0,
                "averageTemperature": round(mean(reading.temperature for _, reading in pairs), 1),
                "emotions": distribution(names, key="emotion"),
            }
        )
    results.sort(key=lambda item: item["count"], reverse=True)
    return results


def _average(values: Sequence[int]) -> Optional[float]:
    return round(mean(values), 1) if values else None


def weather_summary(weather: Sequence[WeatherEntry]) -> Dict[str, Any]:
    temperatures = [reading.temperature for reading in weather]
    humidities = [reading.humidity for reading in weather]
    latest = max(weather, key=lambda reading: reading.timestamp) if weather else None
    return {
        "total": len(weather),
        "conditions": distribution([reading.condition for reading in weather], key="condition"),
        "averageTemperature": _average(temperatures),
        "minTemperature": min(temperatures) if temperatures else None,
        "maxTemperature": max(temperatures) if temperatures else None,
        "averageHumidity": _average(humidities),
        "latest": latest.as_wire() if latest else None,
    }


__all__ = ["DEFAULT_WINDOW_MINUTES", "match_weather", "weather_emotion_correlation", "weather_summary"]
