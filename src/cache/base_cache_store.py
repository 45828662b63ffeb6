# src/cache/base_cache_store.py - v2
"""Abstract answer cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from docquery.cache.models import CacheStats


class BaseCacheStore(ABC):
    """Content-addressed, time-bounded memoization of answer sets.

    Implementations must be safe under concurrent invocation and must never
    return an entry older than their TTL.
    """

    @abstractmethod
    async def get(self, fingerprint: str) -> list[str] | None:
        """Return cached answers if present and fresh, else None."""

    @abstractmethod
    async def put(self, fingerprint: str, answers: Sequence[str]) -> None:
        """Store or overwrite answers with the current timestamp."""

    @abstractmethod
    async def delete(self, fingerprint: str) -> None:
        """Remove a cache entry if present."""

    @abstractmethod
    async def sweep(self) -> int:
        """Remove every expired entry. Returns the number removed."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop all entries."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Snapshot of hit/miss/expiry counters."""
