"""Tests for the bounded per-category log store."""

import pytest

from emolamp_server.models import LogCategory
from emolamp_server.services import MAX_LOGS, LogStore
from factories import HOUR, emotion, ms, weather


class TestAppend:
    """FIFO cap and snapshot isolation."""

    @pytest.mark.parametrize("category", list(LogCategory))
    def test_cap_evicts_single_oldest(self, category):
        store = LogStore()
        for index in range(MAX_LOGS + 1):
            store.append(category, emotion(timestamp=index + 1))

        entries = store.snapshot(category)
        assert len(entries) == MAX_LOGS
        assert entries[0].timestamp == 2
        assert entries[-1].timestamp == MAX_LOGS + 1

    def test_categories_are_independent(self):
        store = LogStore(max_logs=2)
        store.append(LogCategory.EMOTION, emotion(timestamp=1))
        store.append(LogCategory.EMOTION, emotion(timestamp=2))
        store.append(LogCategory.EMOTION, emotion(timestamp=3))
        store.append(LogCategory.WEATHER, weather(timestamp=1))

        assert store.counts() == {"emotion": 2, "weather": 1, "state": 0, "manualstate": 0}

    def test_snapshot_is_a_copy(self):
        store = LogStore()
        store.append(LogCategory.EMOTION, emotion("joy", timestamp=1))
        snapshot = store.snapshot(LogCategory.EMOTION)
        store.append(LogCategory.EMOTION, emotion("calm", timestamp=2))

        assert [entry.emotion for entry in snapshot] == ["joy"]

    def test_accepts_plain_category_strings(self):
        store = LogStore()
        store.append("weather", weather(timestamp=5))
        assert store.snapshot(LogCategory.WEATHER)[-1].timestamp == 5


class TestLatest:
    def test_newest_first(self):
        store = LogStore()
        for index in range(5):
            store.append(LogCategory.EMOTION, emotion(timestamp=index))

        assert [entry.timestamp for entry in store.latest(LogCategory.EMOTION, 3)] == [4, 3, 2]

    def test_zero_limit(self):
        store = LogStore()
        store.append(LogCategory.EMOTION, emotion(timestamp=1))
        assert store.latest(LogCategory.EMOTION, 0) == []


class TestSweep:
    def test_drops_25h_keeps_23h(self):
        now = ms(hour=12)
        store = LogStore()
        store.append(LogCategory.EMOTION, emotion("old", timestamp=now - 25 * HOUR))
        store.append(LogCategory.EMOTION, emotion("fresh", timestamp=now - 23 * HOUR))
        store.append(LogCategory.WEATHER, weather(timestamp=now - 25 * HOUR))

        removed = store.sweep(now, 24 * HOUR)

        assert removed == 2
        assert [entry.emotion for entry in store.snapshot(LogCategory.EMOTION)] == ["fresh"]
        assert store.snapshot(LogCategory.WEATHER) == []

    def test_cap_still_applies_after_sweep(self):
        store = LogStore(max_logs=2)
        now = ms()
        store.append(LogCategory.EMOTION, emotion(timestamp=now - 30 * HOUR))
        store.append(LogCategory.EMOTION, emotion(timestamp=now))
        store.sweep(now, 24 * HOUR)
        store.append(LogCategory.EMOTION, emotion(timestamp=now + 1))
        store.append(LogCategory.EMOTION, emotion(timestamp=now + 2))

        assert [entry.timestamp for entry in store.snapshot(LogCategory.EMOTION)] == [now + 1, now + 2]
