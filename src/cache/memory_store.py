# src/cache/memory_store.py - v1
"""In-process cache stores (CACHE_BACKEND=memory).

Entries live for the lifetime of the process only. A threading lock guards the
dict so the store can be shared between event loops or worker threads; no
method awaits while holding it.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence

from docquery.cache.base_cache_store import BaseCacheStore
from docquery.cache.models import CacheEntry, CacheStats

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


class InMemoryCacheStore(BaseCacheStore):
    """Dict-backed TTL cache, last writer wins."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._expirations = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    async def get(self, fingerprint: str) -> list[str] | None:
        """Return cached answers if the entry is within TTL.

        Stale entries are left for sweep() but are never returned.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(fingerprint)
            if entry is None or not entry.is_fresh(now, self._ttl):
                self._misses += 1
                return None
            self._hits += 1
            return list(entry.answers)

    async def put(self, fingerprint: str, answers: Sequence[str]) -> None:
        # Entry is built before the lock so readers only ever see whole entries
        entry = CacheEntry(
            fingerprint=fingerprint,
            answers=tuple(answers),
            created_at=self._clock(),
        )
        with self._lock:
            self._entries[fingerprint] = entry
        logger.debug("Cached %d answers under %s", len(entry.answers), fingerprint[:12])

    async def delete(self, fingerprint: str) -> None:
        with self._lock:
            self._entries.pop(fingerprint, None)

    async def sweep(self) -> int:
        """Remove entries whose age exceeds the TTL."""
        now = self._clock()
        with self._lock:
            stale = [
                key for key, entry in self._entries.items()
                if not entry.is_fresh(now, self._ttl)
            ]
            for key in stale:
                del self._entries[key]
            self._expirations += len(stale)
        if stale:
            logger.debug("Swept %d expired cache entries", len(stale))
        return len(stale)

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                expirations=self._expirations,
                entries=len(self._entries),
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class NullCacheStore(BaseCacheStore):
    """Store that never retains anything (CACHE_ENABLED=false)."""

    def __init__(self) -> None:
        self._misses = 0

    async def get(self, fingerprint: str) -> list[str] | None:
        self._misses += 1
        return None

    async def put(self, fingerprint: str, answers: Sequence[str]) -> None:
        return None

    async def delete(self, fingerprint: str) -> None:
        return None

    async def sweep(self) -> int:
        return 0

    async def clear(self) -> None:
        return None

    def stats(self) -> CacheStats:
        return CacheStats(misses=self._misses)
