# triveast/quote_cache.py
# Purpose: Short-lived cache for live quotes.
# Why: Reduce API calls to Yahoo, protect against rate limits.
# Pitfalls: No stale tier. An expired quote is never served; provider errors propagate.

from __future__ import annotations

import logging
import time
from typing import Protocol

from triveast.cache import Clock, TtlStore
from triveast.errors import FetchError, InvalidQuote
from triveast.observability import CACHE_EVENTS, UPSTREAM_ERRORS
from triveast.schemas import CacheStats, Quote

logger = logging.getLogger("triveast.quote_cache")

QUOTE_TTL_SEC = 60


class QuoteProvider(Protocol):
    async def fetch_quote(self, symbol: str) -> Quote: ...


class QuoteCache:
    def __init__(
        self, provider: QuoteProvider, ttl_s: float = QUOTE_TTL_SEC, *, clock: Clock = time.time
    ):
        self.provider = provider
        self._store: TtlStore[Quote] = TtlStore(ttl_s, clock=clock)

    @property
    def ttl_s(self) -> float:
        return self._store.ttl_s

    async def get_quote(self, symbol: str) -> Quote:
        key = symbol.strip().upper()
        entry = self._store.get(key)
        if entry and entry.age(self._store.now()) < self.ttl_s:
            CACHE_EVENTS.labels(cache="quotes", outcome="hit").inc()
            return entry.value

        CACHE_EVENTS.labels(cache="quotes", outcome="miss").inc()
        try:
            quote = await self.provider.fetch_quote(key)
        except (FetchError, InvalidQuote) as e:
            UPSTREAM_ERRORS.labels(
                provider=getattr(self.provider, "name", "quotes"), kind=type(e).__name__
            ).inc()
            logger.warning(
                "quote fetch failed for %s: %s",
                key,
                e,
                extra={"symbol": key, "reason": type(e).__name__},
            )
            raise

        self._store.put(key, quote)
        return quote

    def cache_stats(self) -> CacheStats:
        return self._store.stats()

    def clear(self) -> None:
        self._store.clear()
