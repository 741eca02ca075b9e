"""Application context shared by request handlers and background sweeps."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import tzinfo

from fastapi import Request

from ..config import Settings
from ..utils.timezones import resolve_timezone
from .janitor import Janitor
from .lamp_state import CurrentState
from .log_store import LogStore
from .message_store import MessageStore


@dataclass
class AppContext:
    settings: Settings
    tz: tzinfo
    log_store: LogStore
    message_store: MessageStore
    current_state: CurrentState
    janitor: Janitor
    started_at: float = field(default_factory=time.monotonic)

    @property
    def uptime(self) -> float:
        """Seconds since the context was built."""
        return time.monotonic() - self.started_at


def build_context(settings: Settings) -> AppContext:
    log_store = LogStore(max_logs=settings.max_logs)
    message_store = MessageStore(max_per_topic=settings.max_messages_per_topic)
    return AppContext(
        settings=settings,
        tz=resolve_timezone(settings.timezone),
        log_store=log_store,
        message_store=message_store,
        current_state=CurrentState(),
        janitor=Janitor(settings, log_store, message_store),
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context attached to the running app."""
    return request.app.state.context


__all__ = ["AppContext", "build_context", "get_context"]
