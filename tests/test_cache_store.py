"""Tests for the TTL store shared by both caches."""

import pytest

from tests.helpers import FakeClock
from triveast.cache import CacheEntry, TtlStore


class TestCacheEntry:
    def test_expiry_is_inclusive_of_deadline(self) -> None:
        entry = CacheEntry(value="x", stored_at=100.0, expires_at=160.0)

        assert not entry.is_expired(160.0)
        assert entry.is_expired(160.5)
        assert entry.age(130.0) == 30.0

    def test_entry_is_immutable(self) -> None:
        entry = CacheEntry(value="x", stored_at=0.0, expires_at=1.0)

        with pytest.raises(AttributeError):
            entry.value = "y"  # type: ignore[misc]


class TestTtlStore:
    def setup_method(self) -> None:
        self.clock = FakeClock()
        self.store: TtlStore[str] = TtlStore(60, clock=self.clock)

    def test_put_sets_expiry_from_ttl(self) -> None:
        entry = self.store.put("k", "v")

        assert entry.expires_at == entry.stored_at + 60
        assert self.store.get("k") is entry

    def test_put_replaces_entry(self) -> None:
        first = self.store.put("k", "v1")
        self.clock.advance(5)
        second = self.store.put("k", "v2")

        assert self.store.get("k") is second
        assert first.value == "v1"
        assert len(self.store) == 1

    def test_expired_entries_are_kept_until_stale(self) -> None:
        self.store.put("k", "v")
        self.clock.advance(61)

        entry = self.store.get("k")
        assert entry is not None
        assert entry.is_expired(self.clock())

    def test_purge_drops_entries_older_than_twice_ttl(self) -> None:
        self.store.put("old", "v")
        self.clock.advance(100)
        self.store.put("young", "v")

        self.clock.advance(21)  # "old" is now 121s old, past 2 x 60
        removed = self.store.purge_stale()

        assert removed == 1
        assert "old" not in self.store
        assert "young" in self.store

    def test_put_sweeps_stale_entries(self) -> None:
        self.store.put("a", "v")
        self.clock.advance(60 + 2 * 60 + 1)

        self.store.put("b", "v")

        assert "a" not in self.store
        assert self.store.stats().total_entries == 1

    def test_stats_counts_valid_and_expired(self) -> None:
        self.store.put("a", "v")
        self.clock.advance(30)
        self.store.put("b", "v")
        self.clock.advance(40)  # a expired, b still valid

        stats = self.store.stats()

        assert stats.total_entries == 2
        assert stats.valid_entries == 1
        assert stats.expired_entries == 1

    def test_stats_drops_stale_entries_without_a_put(self) -> None:
        self.store.put("a", "v")
        self.clock.advance(60 + 2 * 60 + 1)

        stats = self.store.stats()

        assert stats.total_entries == 0
        assert "a" not in self.store

    def test_clear(self) -> None:
        self.store.put("a", "v")
        self.store.clear()

        assert len(self.store) == 0

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_rejects_non_positive_ttl(self, ttl: float) -> None:
        with pytest.raises(ValueError):
            TtlStore(ttl)
