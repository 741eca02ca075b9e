"""Service layer components."""

from .context import AppContext, build_context, get_context
from .janitor import Janitor, PeriodicSweep
from .lamp_state import CurrentState
from .log_store import MAX_LOGS, LogStore
from .message_store import MAX_MESSAGES_PER_TOPIC, MessageStore


__all__ = [
    "AppContext",
    "build_context",
    "get_context",
    "Janitor",
    "PeriodicSweep",
    "CurrentState",
    "LogStore",
    "MAX_LOGS",
    "MessageStore",
    "MAX_MESSAGES_PER_TOPIC",
]
