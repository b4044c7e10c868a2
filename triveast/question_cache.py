"""
Question batches per category with a three-tier read path.

  fresh cache -> provider (store + sweep) -> stale cache -> hardcoded fallback

Notes / Pitfalls:
- One batch per category, whatever limit was asked for. A later call with a
  bigger limit than the stored batch refetches and replaces it.
- Single-question draws pick from the first 20 items of the batch only.
- Upstream failures never reach the caller.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Sequence
from typing import Protocol

from triveast.cache import Clock, TtlStore
from triveast.errors import FetchError, UnknownCategory, UpstreamError
from triveast.fallback import fallback_questions
from triveast.observability import CACHE_EVENTS, UPSTREAM_ERRORS
from triveast.schemas import CacheStats, Question

logger = logging.getLogger("triveast.question_cache")

QUESTION_TTL_SEC = 10 * 60
MAX_LIMIT = 50
SINGLE_DRAW_BATCH = 50
MIN_BATCH = 20
RANDOM_WINDOW = 20

_RECOVERABLE = (UpstreamError, FetchError, UnknownCategory)


class QuestionProvider(Protocol):
    async def fetch_questions(self, category_id: str, amount: int) -> list[Question]: ...


def batch_size(limit: int) -> int:
    return SINGLE_DRAW_BATCH if limit == 1 else max(limit, MIN_BATCH)


class QuestionCache:
    def __init__(
        self,
        provider: QuestionProvider,
        ttl_s: float = QUESTION_TTL_SEC,
        *,
        clock: Clock = time.time,
        rng: random.Random | None = None,
    ):
        self.provider = provider
        self._store: TtlStore[tuple[Question, ...]] = TtlStore(ttl_s, clock=clock)
        self._rng = rng or random.Random()

    @property
    def ttl_s(self) -> float:
        return self._store.ttl_s

    def _select(self, batch: Sequence[Question], limit: int) -> list[Question]:
        if limit == 1:
            idx = self._rng.randrange(min(len(batch), RANDOM_WINDOW))
            return [batch[idx]]
        return list(batch[:limit])

    async def get_questions(self, category_id: str, limit: int = 10) -> list[Question]:
        if not 1 <= limit <= MAX_LIMIT:
            raise ValueError(f"limit must be within 1..{MAX_LIMIT}, got {limit}")

        entry = self._store.get(category_id)
        if entry and not entry.is_expired(self._store.now()) and len(entry.value) >= limit:
            CACHE_EVENTS.labels(cache="questions", outcome="hit").inc()
            return self._select(entry.value, limit)

        CACHE_EVENTS.labels(cache="questions", outcome="miss").inc()
        try:
            fetched = await self.provider.fetch_questions(category_id, batch_size(limit))
        except _RECOVERABLE as e:
            UPSTREAM_ERRORS.labels(
                provider=getattr(self.provider, "name", "trivia"), kind=type(e).__name__
            ).inc()
            logger.warning(
                "question fetch failed for %s: %s",
                category_id,
                e,
                extra={"category_id": category_id, "reason": type(e).__name__},
            )
            return self._degrade(category_id, limit)

        if not fetched:
            return self._degrade(category_id, limit)

        batch = tuple(fetched)
        self._store.put(category_id, batch)
        return self._select(batch, limit)

    def _degrade(self, category_id: str, limit: int) -> list[Question]:
        # Entry re-read after the await: may have been refreshed or purged meanwhile
        stale = self._store.get(category_id)
        if stale and stale.value:
            CACHE_EVENTS.labels(cache="questions", outcome="stale").inc()
            logger.info("serving stale questions for %s", category_id, extra={"outcome": "stale"})
            return self._select(stale.value, limit)

        CACHE_EVENTS.labels(cache="questions", outcome="fallback").inc()
        logger.info(
            "serving fallback questions for %s", category_id, extra={"outcome": "fallback"}
        )
        return fallback_questions(category_id, limit)

    def cache_stats(self) -> CacheStats:
        return self._store.stats()

    def clear(self) -> None:
        self._store.clear()
