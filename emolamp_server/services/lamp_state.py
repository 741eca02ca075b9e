"""Process-wide snapshot of the lamp, updated by every successful write."""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional

from ..models import EmotionEntry, LampState, ManualStateEntry, StateEntry, WeatherEntry
from ..utils.timezones import now_ms


class CurrentState:
    """Holds the latest :class:`LampState` behind a lock."""

    def __init__(self, initial: Optional[LampState] = None) -> None:
        self._lock = threading.Lock()
        self._state = initial or LampState(timestamp=now_ms())

    def get(self) -> LampState:
        with self._lock:
            return self._state.model_copy(deep=True)

    def merge(self, payload: Mapping[str, Any], *, timestamp: Optional[int] = None) -> LampState:
        with self._lock:
            self._state = self._state.merged(payload, timestamp=timestamp or now_ms())
            return self._state.model_copy(deep=True)

    def apply_emotion(self, entry: EmotionEntry) -> LampState:
        return self.merge(
            {
                "emotion": entry.emotion,
                "hue": entry.hue,
                "saturation": entry.saturation,
                "brightness": entry.brightness,
                "colorHex": entry.color_hex,
                "summary": entry.summary,
            },
            timestamp=entry.timestamp,
        )

    def apply_weather(self, entry: WeatherEntry) -> LampState:
        return self.merge(
            {
                "weather": entry.condition,
                "temperature": entry.temperature,
                "humidity": entry.humidity,
                "cityName": entry.city_name,
            },
            timestamp=entry.timestamp,
        )

    def apply_state_change(self, entry: StateEntry) -> LampState:
        return self.merge({"mode": entry.mode, "lastAction": entry.action}, timestamp=entry.timestamp)

    def apply_manual_state(self, entry: ManualStateEntry) -> LampState:
        return self.merge(
            {
                "mode": entry.mode,
                "hue": entry.hue,
                "saturation": entry.saturation,
                "brightness": entry.brightness,
                "manualColorHex": entry.color_hex,
            },
            timestamp=entry.timestamp,
        )


__all__ = ["CurrentState"]
