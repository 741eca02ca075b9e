"""Background sweeps that trim expired entries from the in-memory stores."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from ..config import Settings
from ..logging_config import logger
from ..utils.timezones import now_ms
from .log_store import LogStore
from .message_store import MessageStore


class PeriodicSweep:
    """Runs *action* every *interval_seconds* on the event loop.

    The first run happens one interval after start, like a plain timer.
    """

    def __init__(self, name: str, interval_seconds: float, action: Callable[[], object]) -> None:
        self.name = name
        self._interval = interval_seconds
        self._action = action
        self._task: Optional[asyncio.Task[None]] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> bool:
        """Run the sweep a single time; failures are logged and reported as ``False``."""
        try:
            self._action()
        except Exception:
            logger.exception("sweep failed; will retry on next tick", extra={"sweep": self.name})
            return False
        return True

    def start(self) -> None:
        if self.running:
            return
        loop = asyncio.get_running_loop()
        self._running = True
        self._task = loop.create_task(self._run(), name=f"janitor-{self.name}")

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _run(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            self.run_once()


class Janitor:
    """Owns the periodic sweeps enabled for the configured mode."""

    def __init__(
        self,
        settings: Settings,
        log_store: LogStore,
        message_store: MessageStore,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._settings = settings
        self._log_store = log_store
        self._message_store = message_store
        self._clock = clock
        self._lock = asyncio.Lock()
        self.sweeps: List[PeriodicSweep] = []
        if settings.stats_enabled:
            self.sweeps.append(PeriodicSweep("logs", settings.log_sweep_interval_seconds, self.sweep_logs))
        if settings.pubsub_enabled:
            self.sweeps.append(
                PeriodicSweep("subscribers", settings.subscriber_sweep_interval_seconds, self.sweep_subscribers)
            )
            self.sweeps.append(
                PeriodicSweep("messages", settings.message_sweep_interval_seconds, self.sweep_messages)
            )

    def sweep_logs(self) -> int:
        return self._log_store.sweep(self._clock(), self._settings.log_retention_ms)

    def sweep_subscribers(self) -> List[str]:
        return self._message_store.sweep_subscribers(self._clock(), self._settings.subscriber_timeout_ms)

    def sweep_messages(self) -> int:
        return self._message_store.sweep_messages(self._clock(), self._settings.message_max_age_ms)

    async def start(self) -> None:
        async with self._lock:
            for sweep in self.sweeps:
                sweep.start()
            logger.info("Janitor started", extra={"sweeps": [sweep.name for sweep in self.sweeps]})

    async def stop(self) -> None:
        async with self._lock:
            for sweep in self.sweeps:
                await sweep.stop()
            logger.info("Janitor stopped")


__all__ = ["Janitor", "PeriodicSweep"]
