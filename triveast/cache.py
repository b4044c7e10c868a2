# triveast/cache.py
# Purpose: In-memory TTL store shared by the question and quote caches.
# Why: Keep expired entries around as fallback material, purge them once stale.
# Pitfalls: Not persistent; each process has its own store.

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from triveast.schemas import CacheStats

T = TypeVar("T")

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def age(self, now: float) -> float:
        return now - self.stored_at


class TtlStore(Generic[T]):
    """
    key -> CacheEntry with a fixed TTL.

    Entries past expires_at are kept until they are older than 2 x TTL;
    purge_stale() drops those; put() and stats() both call it.
    Callers decide what "fresh" means for them.
    """

    def __init__(self, ttl_s: float, clock: Clock = time.time):
        if ttl_s <= 0:
            raise ValueError(f"ttl must be positive, got {ttl_s}")
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> CacheEntry[T] | None:
        """Return the entry for key, expired or not."""
        return self._entries.get(key)

    def put(self, key: str, value: T) -> CacheEntry[T]:
        """Replace the entry for key and sweep stale entries."""
        now = self.now()
        entry = CacheEntry(value=value, stored_at=now, expires_at=now + self.ttl_s)
        self._entries[key] = entry
        self.purge_stale(now)
        return entry

    def purge_stale(self, now: float | None = None) -> int:
        now = self.now() if now is None else now
        stale = [k for k, e in self._entries.items() if now > e.expires_at + self.ttl_s]
        for k in stale:
            self._entries.pop(k, None)
        return len(stale)

    def stats(self) -> CacheStats:
        """Counts after dropping stale entries."""
        now = self.now()
        self.purge_stale(now)
        valid = sum(1 for e in self._entries.values() if not e.is_expired(now))
        total = len(self._entries)
        return CacheStats(total_entries=total, valid_entries=valid, expired_entries=total - valid)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
