"""Telemetry log entries and their permissive ingest defaults."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Literal, Union

from pydantic import Field

from ..utils.coercion import as_mapping, coerce_int, coerce_str
from .common import WireModel

DEFAULT_EMOTION = "calm"
DEFAULT_HUE = 120
DEFAULT_SATURATION = 70
DEFAULT_BRIGHTNESS = 70
DEFAULT_EMOTION_COLOR = "#50C878"
DEFAULT_MANUAL_COLOR = "#FFFFFF"
DEFAULT_CONDITION = "Unknown"
DEFAULT_ACTION = "unknown"

MODE_AUTO = "AUTO"
MODE_MANUAL = "MANUAL"


class LogCategory(str, Enum):
    EMOTION = "emotion"
    WEATHER = "weather"
    STATE = "state"
    MANUAL_STATE = "manualstate"


def normalize_mode(value: Any, default: str = MODE_AUTO) -> str:
    """Map a client mode string onto AUTO/MANUAL."""
    if isinstance(value, str) and value.strip():
        return MODE_MANUAL if value.strip().upper() == MODE_MANUAL else MODE_AUTO
    return default


def _timestamp(payload: Dict[str, Any], received_at: int) -> int:
    supplied = coerce_int(payload.get("timestamp"), None)
    return supplied if supplied is not None and supplied > 0 else received_at


class EmotionEntry(WireModel):
    emotion: str = DEFAULT_EMOTION
    hue: int = DEFAULT_HUE
    saturation: int = DEFAULT_SATURATION
    brightness: int = DEFAULT_BRIGHTNESS
    summary: str = ""
    color_hex: str = DEFAULT_EMOTION_COLOR
    timestamp: int = 0

    @classmethod
    def from_payload(cls, payload: Any, *, received_at: int) -> "EmotionEntry":
        data = as_mapping(payload)
        emotion = coerce_str(data.get("emotion"), DEFAULT_EMOTION).strip().lower()
        return cls(
            emotion=emotion or DEFAULT_EMOTION,
            hue=coerce_int(data.get("hue"), DEFAULT_HUE),
            saturation=coerce_int(data.get("saturation"), DEFAULT_SATURATION),
            brightness=coerce_int(data.get("brightness"), DEFAULT_BRIGHTNESS),
            summary=coerce_str(data.get("summary"), ""),
            color_hex=coerce_str(data.get("colorHex"), DEFAULT_EMOTION_COLOR) or DEFAULT_EMOTION_COLOR,
            timestamp=_timestamp(data, received_at),
        )


class WeatherEntry(WireModel):
    temperature: int = 0
    humidity: int = 0
    condition: str = DEFAULT_CONDITION
    description: str = ""
    city_name: str = ""
    timestamp: int = 0

    @classmethod
    def from_payload(cls, payload: Any, *, received_at: int) -> "WeatherEntry":
        data = as_mapping(payload)
        condition = coerce_str(data.get("condition"), DEFAULT_CONDITION).strip()
        return cls(
            temperature=coerce_int(data.get("temperature"), 0),
            humidity=coerce_int(data.get("humidity"), 0),
            condition=condition or DEFAULT_CONDITION,
            description=coerce_str(data.get("description"), ""),
            city_name=coerce_str(data.get("cityName"), ""),
            timestamp=_timestamp(data, received_at),
        )


class StateEntry(WireModel):
    mode: Literal["AUTO", "MANUAL"] = MODE_AUTO
    action: str = DEFAULT_ACTION
    details: Dict[str, str] = Field(default_factory=dict)
    timestamp: int = 0

    @classmethod
    def from_payload(cls, payload: Any, *, received_at: int) -> "StateEntry":
        data = as_mapping(payload)
        raw_details = data.get("details")
        if raw_details is None:
            details: Dict[str, str] = {}
        elif isinstance(raw_details, dict):
            details = {str(key): str(value) for key, value in raw_details.items()}
        else:
            details = {"info": str(raw_details)}
        action = coerce_str(data.get("action"), DEFAULT_ACTION).strip()
        return cls(
            mode=normalize_mode(data.get("mode")),
            action=action or DEFAULT_ACTION,
            details=details,
            timestamp=_timestamp(data, received_at),
        )


class ManualStateEntry(WireModel):
    mode: Literal["MANUAL"] = MODE_MANUAL
    hue: int = DEFAULT_HUE
    saturation: int = DEFAULT_SATURATION
    brightness: int = DEFAULT_BRIGHTNESS
    color_hex: str = DEFAULT_MANUAL_COLOR
    timestamp: int = 0

    @classmethod
    def from_payload(cls, payload: Any, *, received_at: int) -> "ManualStateEntry":
        data = as_mapping(payload)
        return cls(
            hue=coerce_int(data.get("hue"), DEFAULT_HUE),
            saturation=coerce_int(data.get("saturation"), DEFAULT_SATURATION),
            brightness=coerce_int(data.get("brightness"), DEFAULT_BRIGHTNESS),
            color_hex=coerce_str(data.get("colorHex"), DEFAULT_MANUAL_COLOR) or DEFAULT_MANUAL_COLOR,
            timestamp=_timestamp(data, received_at),
        )


LogEntry = Union[EmotionEntry, WeatherEntry, StateEntry, ManualStateEntry]

ENTRY_TYPES = {
    LogCategory.EMOTION: EmotionEntry,
    LogCategory.WEATHER: WeatherEntry,
    LogCategory.STATE: StateEntry,
    LogCategory.MANUAL_STATE: ManualStateEntry,
}


__all__ = [
    "DEFAULT_BRIGHTNESS",
    "DEFAULT_EMOTION",
    "DEFAULT_EMOTION_COLOR",
    "DEFAULT_HUE",
    "DEFAULT_MANUAL_COLOR",
    "DEFAULT_SATURATION",
    "ENTRY_TYPES",
    "EmotionEntry",
    "LogCategory",
    "LogEntry",
    "MODE_AUTO",
    "MODE_MANUAL",
    "ManualStateEntry",
    "StateEntry",
    "WeatherEntry",
    "normalize_mode",
]
