"""Per-topic message queues backing the long-polling relay.

Polling is deliberately latest-only: a poll returns the single most recent
message the caller has not published itself, so a client that falls behind
skips everything in between. Lamp clients depend on this, so it is kept.
"""

from __future__ import annotations

import json
import threading
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from ..logging_config import logger
from ..models import Message
from ..utils.timezones import now_ms

MAX_MESSAGES_PER_TOPIC = 100


def _preview(payload: Any, limit: int = 100) -> str:
    try:
        text = json.dumps(payload, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(payload)
    return text[:limit]


class MessageStore:
    """Bounded topic queues plus the last poll time of every subscriber."""

    def __init__(self, max_per_topic: int = MAX_MESSAGES_PER_TOPIC) -> None:
        self._max_per_topic = max_per_topic
        self._lock = threading.Lock()
        self._queues: Dict[str, Deque[Message]] = {}
        self._subscribers: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def publish(self, topic: str, payload: Any, client_id: str, *, timestamp: Optional[int] = None) -> Message:
        message = Message(
            topic=topic,
            payload=payload,
            client_id=client_id,
            timestamp=timestamp if timestamp is not None else now_ms(),
        )
        with self._lock:
            queue = self._queues.get(topic)
            if queue is None:
                queue = deque(maxlen=self._max_per_topic)
                self._queues[topic] = queue
            queue.append(message)
        logger.info(
            f"publish {topic}: {_preview(payload)}",
            extra={"topic": topic, "client_id": client_id},
        )
        return message.model_copy(deep=True)

    def poll_since(self, since: int, client_id: str, *, now: Optional[int] = None) -> Optional[Message]:
        """Return the newest message after *since* not sent by *client_id*, if any."""
        with self._lock:
            self._subscribers[client_id] = now if now is not None else now_ms()
            matches = [
                message
                for queue in self._queues.values()
                for message in queue
                if message.timestamp > since and message.client_id != client_id
            ]
            if not matches:
                return None
            matches.sort(key=lambda message: message.timestamp)
            return matches[-1].model_copy(deep=True)

    def topics(self) -> Dict[str, int]:
        """Queued message count per topic, by topic name."""
        with self._lock:
            return {topic: len(self._queues[topic]) for topic in sorted(self._queues)}

    def subscribers(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._subscribers)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def sweep_messages(self, now: int, max_age_ms: int) -> int:
        """Keep only messages younger than *max_age_ms*; empty topics are dropped."""
        removed = 0
        with self._lock:
            for topic in list(self._queues):
                queue = self._queues[topic]
                kept = [message for message in queue if now - message.timestamp < max_age_ms]
                removed += len(queue) - len(kept)
                if kept:
                    self._queues[topic] = deque(kept, maxlen=self._max_per_topic)
                else:
                    del self._queues[topic]
        logger.info("old messages cleaned", extra={"removed": removed})
        return removed

    def sweep_subscribers(self, now: int, timeout_ms: int) -> List[str]:
        """Forget subscribers idle for more than *timeout_ms*."""
        with self._lock:
            stale = [client_id for client_id, last in self._subscribers.items() if now - last > timeout_ms]
            for client_id in stale:
                del self._subscribers[client_id]
        for client_id in stale:
            logger.info(f"removed inactive subscriber: {client_id}", extra={"client_id": client_id})
        return stale


__all__ = ["MAX_MESSAGES_PER_TOPIC", "MessageStore"]
