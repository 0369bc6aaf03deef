"""Tests for per-destination stats and the forwarding circuit breaker."""

import threading
from datetime import datetime, timedelta, timezone

from freezegun import freeze_time

from modules.push.models import DestinationKey
from modules.push.stats import AtomicCounter, AtomicReference, StatsRegistry

KEY = DestinationKey("workspace-1", "10.0.0.1", "https://chat.example.com")


class TestAtomicPrimitives:
    def test_counter_concurrent_increments(self):
        counter = AtomicCounter()

        def work():
            for _ in range(1000):
                counter.increment()

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter.value == 8000

    def test_compare_and_set_by_identity(self):
        first = datetime(2026, 1, 1, tzinfo=timezone.utc)
        equal_copy = datetime(2026, 1, 1, tzinfo=timezone.utc)
        ref = AtomicReference(first)

        assert ref.compare_and_set(equal_copy, None) is False
        assert ref.get() is first
        assert ref.compare_and_set(first, None) is True
        assert ref.get() is None


class TestGetOrCreate:
    def test_returns_same_entry(self, registry):
        assert registry.get_or_create(KEY) is registry.get_or_create(KEY)
        assert len(registry) == 1

    def test_new_entry_is_zeroed(self, registry):
        entry = registry.get_or_create(KEY)
        assert entry.key == KEY
        assert entry.direct_apn.value == 0
        assert entry.direct_fcm.value == 0
        assert entry.forwarded.value == 0
        assert entry.disabled_until.get() is None

    def test_concurrent_first_access_creates_one_entry(self, registry):
        barrier = threading.Barrier(16)
        seen = []

        def work():
            barrier.wait()
            seen.append(registry.get_or_create(KEY))

        threads = [threading.Thread(target=work) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 1
        assert all(entry is seen[0] for entry in seen)

    def test_snapshot_lists_entries_in_insertion_order(self, registry):
        other = DestinationKey("workspace-2", "10.0.0.2", "https://b.example.com")
        registry.get_or_create(KEY)
        registry.get_or_create(other)
        assert [e.key for e in registry.snapshot()] == [KEY, other]


class TestCounters:
    def test_record_methods(self, registry):
        entry = registry.get_or_create(KEY)
        registry.record_direct_apn(entry)
        registry.record_direct_fcm(entry)
        registry.record_direct_fcm(entry)
        registry.record_forwarded(entry)

        assert entry.direct_apn.value == 1
        assert entry.direct_fcm.value == 2
        assert entry.forwarded.value == 1

    def test_direct_deliveries_exclude_mismatch_forwards(self, registry):
        entry = registry.get_or_create(KEY)
        registry.record_direct_apn(entry)
        registry.record_direct_fcm(entry)
        registry.record_direct_fcm(entry)
        registry.record_mismatch_forwarded(entry)
        registry.record_forwarded(entry)

        assert entry.mismatch_forwarded.value == 1
        assert registry.direct_deliveries(entry) == 2


class TestBreaker:
    def test_enabled_by_default(self, registry):
        assert registry.is_disabled(registry.get_or_create(KEY)) is False

    def test_disable_sets_cooldown(self, registry, clock):
        entry = registry.get_or_create(KEY)
        until = registry.disable(entry)
        assert until == clock.now + timedelta(hours=1)
        assert entry.disabled_until.get() == until
        assert registry.is_disabled(entry) is True

    def test_still_disabled_just_before_expiry(self, registry, clock):
        entry = registry.get_or_create(KEY)
        registry.disable(entry)
        clock.advance(minutes=59, seconds=59)
        assert registry.is_disabled(entry) is True

    def test_expired_cooldown_is_cleared(self, registry, clock):
        entry = registry.get_or_create(KEY)
        registry.disable(entry)
        clock.advance(hours=1)

        assert registry.is_disabled(entry) is False
        assert entry.disabled_until.get() is None

    def test_disable_overwrites_running_cooldown(self, registry, clock):
        entry = registry.get_or_create(KEY)
        registry.disable(entry)
        clock.advance(minutes=30)
        until = registry.disable(entry)
        assert until == clock.now + timedelta(hours=1)

    def test_failed_compare_and_set_rereads_value(self, registry, clock):
        entry = registry.get_or_create(KEY)
        registry.disable(entry)
        clock.advance(hours=2)
        fresh_until = clock.now + timedelta(hours=1)
        original_cas = entry.disabled_until.compare_and_set

        def racing_cas(expected, new):
            # another request disables the destination again in between
            entry.disabled_until.set(fresh_until)
            return original_cas(expected, new)

        entry.disabled_until.compare_and_set = racing_cas

        assert registry.is_disabled(entry) is True
        assert entry.disabled_until.get() is fresh_until

    def test_custom_cooldown(self, clock):
        registry = StatsRegistry(disable_seconds=60, clock=clock)
        entry = registry.get_or_create(KEY)
        registry.disable(entry)
        clock.advance(seconds=61)
        assert registry.is_disabled(entry) is False


@freeze_time("2026-10-18 12:00:00")
def test_default_clock_uses_utc_now():
    registry = StatsRegistry()
    entry = registry.get_or_create(KEY)

    until = registry.disable(entry)

    assert until == datetime(2026, 10, 18, 13, 0, tzinfo=timezone.utc)


def test_uptime():
    with freeze_time("2026-10-18 12:00:00") as frozen:
        registry = StatsRegistry()
        frozen.tick(timedelta(minutes=5))
        assert registry.uptime() == timedelta(minutes=5)
