# src/cache/models.py - v2
"""Cache domain models: CacheEntry, CacheStats."""

from __future__ import annotations

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Answer set cached under a request fingerprint."""

    model_config = {"frozen": True}

    fingerprint: str
    answers: tuple[str, ...]
    created_at: float  # store clock reading, not wall time

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """An entry is fresh while its age is at most the TTL."""
        return self.age(now) <= ttl_seconds


class CacheStats(BaseModel):
    """Counters for cache diagnostics."""

    hits: int = 0
    misses: int = 0
    expirations: int = 0
    entries: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
