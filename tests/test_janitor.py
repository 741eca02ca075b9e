"""Tests for the periodic store sweeps."""

import asyncio
import logging

from emolamp_server.config import Settings
from emolamp_server.models import LogCategory
from emolamp_server.services import Janitor, LogStore, MessageStore, PeriodicSweep
from factories import HOUR, MINUTE, emotion, ms

NOW = ms(hour=12)


def _janitor(mode="all", **overrides):
    settings = Settings(mode=mode, timezone="UTC", **overrides)
    log_store = LogStore()
    message_store = MessageStore()
    return Janitor(settings, log_store, message_store, clock=lambda: NOW), log_store, message_store


class TestSweepSelection:
    def test_all_mode_runs_every_sweep(self):
        janitor, _, _ = _janitor("all")
        assert [sweep.name for sweep in janitor.sweeps] == ["logs", "subscribers", "messages"]

    def test_stats_mode_only_sweeps_logs(self):
        janitor, _, _ = _janitor("stats")
        assert [sweep.name for sweep in janitor.sweeps] == ["logs"]

    def test_pubsub_mode_skips_logs(self):
        janitor, _, _ = _janitor("pubsub")
        assert [sweep.name for sweep in janitor.sweeps] == ["subscribers", "messages"]


class TestSweeps:
    def test_log_sweep_uses_retention_window(self):
        janitor, log_store, _ = _janitor()
        log_store.append(LogCategory.EMOTION, emotion("stale", timestamp=NOW - 25 * HOUR))
        log_store.append(LogCategory.EMOTION, emotion("kept", timestamp=NOW - 23 * HOUR))

        assert janitor.sweep_logs() == 1
        assert [entry.emotion for entry in log_store.snapshot(LogCategory.EMOTION)] == ["kept"]

    def test_message_and_subscriber_sweeps(self):
        janitor, _, message_store = _janitor()
        message_store.publish("t", "old", "B", timestamp=NOW - 2 * HOUR)
        message_store.publish("t", "new", "B", timestamp=NOW - MINUTE)
        message_store.poll_since(0, "idle", now=NOW - 10 * MINUTE)
        message_store.poll_since(0, "active", now=NOW - MINUTE)

        assert janitor.sweep_messages() == 1
        assert janitor.sweep_subscribers() == ["idle"]


class TestPeriodicSweep:
    def test_failure_is_logged_not_raised(self, caplog):
        def boom():
            raise RuntimeError("disk on fire")

        sweep = PeriodicSweep("broken", 60, boom)
        with caplog.at_level(logging.ERROR, logger="emolamp.server"):
            assert sweep.run_once() is False

        assert any("sweep failed" in record.getMessage() for record in caplog.records)

    def test_keeps_ticking_after_failure(self):
        calls = []

        def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("first tick fails")

        async def scenario():
            sweep = PeriodicSweep("flaky", 0.01, flaky)
            sweep.start()
            assert sweep.running
            for _ in range(100):
                if len(calls) >= 3:
                    break
                await asyncio.sleep(0.01)
            await sweep.stop()
            assert not sweep.running

        asyncio.run(scenario())
        assert len(calls) >= 3

    def test_janitor_start_and_stop(self):
        janitor, _, _ = _janitor(
            log_sweep_interval_seconds=0.01,
            message_sweep_interval_seconds=0.01,
            subscriber_sweep_interval_seconds=0.01,
        )

        async def scenario():
            await janitor.start()
            assert all(sweep.running for sweep in janitor.sweeps)
            await asyncio.sleep(0.05)
            await janitor.stop()
            assert not any(sweep.running for sweep in janitor.sweeps)

        asyncio.run(scenario())
