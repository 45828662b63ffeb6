# src/cache/cache_factory.py - v3
"""Factory for cache store instantiation."""

from __future__ import annotations

from docquery.cache.base_cache_store import BaseCacheStore
from docquery.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to a 5-minute memory store.

    Returns:
        Configured BaseCacheStore implementation.
    """
    from docquery.cache.memory_store import (
        DEFAULT_TTL_SECONDS,
        InMemoryCacheStore,
        NullCacheStore,
    )

    if settings is None:
        return InMemoryCacheStore(ttl_seconds=DEFAULT_TTL_SECONDS)

    if not settings.cache_enabled:
        return NullCacheStore()

    if settings.cache_backend == "memory":
        return InMemoryCacheStore(ttl_seconds=settings.cache_ttl_seconds)

    raise ValueError(f"Unsupported cache backend: {settings.cache_backend!r}")
