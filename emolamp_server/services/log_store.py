"""Bounded in-memory telemetry logs, one FIFO sequence per category."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, List

from ..logging_config import logger
from ..models import LogCategory, LogEntry

MAX_LOGS = 1000


class LogStore:
    """Keep at most ``max_logs`` entries per category, evicting the oldest first."""

    def __init__(self, max_logs: int = MAX_LOGS) -> None:
        self._max_logs = max_logs
        self._lock = threading.Lock()
        self._logs: Dict[LogCategory, Deque[LogEntry]] = {
            category: deque(maxlen=max_logs) for category in LogCategory
        }

    @property
    def max_logs(self) -> int:
        return self._max_logs

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def append(self, category: LogCategory, entry: LogEntry) -> None:
        with self._lock:
            self._logs[LogCategory(category)].append(entry)

    def snapshot(self, category: LogCategory) -> List[LogEntry]:
        """Return a copy of the category in insertion order."""
        with self._lock:
            return list(self._logs[LogCategory(category)])

    def latest(self, category: LogCategory, limit: int) -> List[LogEntry]:
        """Return up to *limit* entries, newest first."""
        if limit <= 0:
            return []
        with self._lock:
            entries = list(self._logs[LogCategory(category)])
        return entries[-limit:][::-1]

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {category.value: len(entries) for category, entries in self._logs.items()}

    def sweep(self, now: int, max_age_ms: int) -> int:
        """Drop entries at least *max_age_ms* old in every category; return how many went."""
        cutoff = now - max_age_ms
        removed = 0
        with self._lock:
            for category, entries in self._logs.items():
                kept = [entry for entry in entries if entry.timestamp > cutoff]
                dropped = len(entries) - len(kept)
                if dropped:
                    self._logs[category] = deque(kept, maxlen=self._max_logs)
                    removed += dropped
        if removed:
            logger.info("swept expired log entries", extra={"removed": removed})
        return removed


__all__ = ["LogStore", "MAX_LOGS"]
