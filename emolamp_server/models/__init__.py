from .common import WireModel
from .logs import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_HUE,
    DEFAULT_SATURATION,
    ENTRY_TYPES,
    MODE_AUTO,
    MODE_MANUAL,
    EmotionEntry,
    LogCategory,
    LogEntry,
    ManualStateEntry,
    StateEntry,
    WeatherEntry,
)
from .meta import StatusResponse
from .pubsub import LED_TOPIC, STATE_TOPIC, LampState, LedColor, Message

__all__ = [
    "DEFAULT_BRIGHTNESS",
    "DEFAULT_HUE",
    "DEFAULT_SATURATION",
    "MODE_AUTO",
    "MODE_MANUAL",
    "ENTRY_TYPES",
    "EmotionEntry",
    "LED_TOPIC",
    "LampState",
    "LedColor",
    "LogCategory",
    "LogEntry",
    "ManualStateEntry",
    "Message",
    "STATE_TOPIC",
    "StateEntry",
    "StatusResponse",
    "WeatherEntry",
    "WireModel",
]
