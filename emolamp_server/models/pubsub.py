from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import ConfigDict

from ..utils.coercion import as_mapping, clamp, coerce_int, coerce_str
from .common import WireModel
from .logs import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_EMOTION,
    DEFAULT_EMOTION_COLOR,
    DEFAULT_HUE,
    DEFAULT_MANUAL_COLOR,
    DEFAULT_SATURATION,
    MODE_AUTO,
    MODE_MANUAL,
)

STATE_TOPIC = "emolamp/state"
LED_TOPIC = "emolamp/led"


class Message(WireModel):
    topic: str
    payload: Any = None
    client_id: str
    timestamp: int


class LedColor(WireModel):
    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "LedColor":
        data = as_mapping(payload)
        channels = {name: clamp(coerce_int(data.get(name), 0), 0, 255) for name in ("r", "g", "b")}
        return cls(**channels)


_INT_KEYS = {"hue", "saturation", "brightness"}
_OPTIONAL_INT_KEYS = {"temperature", "humidity"}
_STR_KEYS = {"emotion", "colorHex", "manualColorHex", "summary", "weather", "cityName", "lastAction"}


class LampState(WireModel):
    """Last-known lamp snapshot; unknown keys merged in by clients are kept."""

    model_config = ConfigDict(extra="allow")

    mode: str = MODE_AUTO
    emotion: str = DEFAULT_EMOTION
    hue: int = DEFAULT_HUE
    saturation: int = DEFAULT_SATURATION
    brightness: int = DEFAULT_BRIGHTNESS
    color_hex: str = DEFAULT_EMOTION_COLOR
    manual_color_hex: str = DEFAULT_MANUAL_COLOR
    summary: str = ""
    weather: str = ""
    temperature: Optional[int] = None
    humidity: Optional[int] = None
    city_name: str = ""
    last_action: Optional[str] = None
    timestamp: int = 0

    def merged(self, payload: Mapping[str, Any], *, timestamp: int) -> "LampState":
        """Return a copy with *payload* merged over it.

        Values that cannot be coerced to the field's type leave the previous
        value in place.
        """

        current: Dict[str, Any] = self.as_wire()
        for key, value in payload.items():
            key = str(key)
            if key == "timestamp":
                continue
            if key == "mode":
                if isinstance(value, str) and value.strip().upper() in {MODE_AUTO, MODE_MANUAL}:
                    current[key] = value.strip().upper()
            elif key in _INT_KEYS:
                coerced = coerce_int(value, None)
                if coerced is not None:
                    current[key] = coerced
            elif key in _OPTIONAL_INT_KEYS:
                current[key] = None if value is None else coerce_int(value, current.get(key))
            elif key in _STR_KEYS:
                if value is not None and not isinstance(value, (dict, list)):
                    current[key] = coerce_str(value, current.get(key) or "")
            else:
                current[key] = value
        current["timestamp"] = timestamp
        return LampState.model_validate(current)


__all__ = ["LED_TOPIC", "LampState", "LedColor", "Message", "STATE_TOPIC"]
