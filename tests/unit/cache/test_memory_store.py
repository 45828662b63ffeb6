# tests/unit/cache/test_memory_store.py - v1
"""Tests for cache/memory_store.py - TTL semantics, sweep, concurrency."""

from __future__ import annotations

import asyncio
import threading

import pytest

from docquery.cache.memory_store import DEFAULT_TTL_SECONDS, InMemoryCacheStore, NullCacheStore


class TestInMemoryCacheStore:
    def test_default_ttl_is_five_minutes(self):
        assert DEFAULT_TTL_SECONDS == 300.0
        assert InMemoryCacheStore().ttl_seconds == 300.0

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError, match="ttl_seconds"):
            InMemoryCacheStore(ttl_seconds=0)

    @pytest.mark.asyncio
    async def test_put_and_get(self, cache_store):
        await cache_store.put("fp1", ["a", "b"])
        assert await cache_store.get("fp1") == ["a", "b"]

    @pytest.mark.asyncio
    async def test_get_missing(self, cache_store):
        assert await cache_store.get("nope") is None

    @pytest.mark.asyncio
    async def test_put_overwrites(self, cache_store):
        await cache_store.put("fp1", ["old"])
        await cache_store.put("fp1", ["new"])
        assert await cache_store.get("fp1") == ["new"]
        assert len(cache_store) == 1

    @pytest.mark.asyncio
    async def test_returned_list_is_a_copy(self, cache_store):
        await cache_store.put("fp1", ["a"])
        got = await cache_store.get("fp1")
        got.append("mutated")
        assert await cache_store.get("fp1") == ["a"]

    @pytest.mark.asyncio
    async def test_fresh_at_exact_ttl(self, cache_store, clock):
        await cache_store.put("fp1", ["a"])
        clock.advance(300.0)
        assert await cache_store.get("fp1") == ["a"]

    @pytest.mark.asyncio
    async def test_absent_past_ttl_without_sweep(self, cache_store, clock):
        await cache_store.put("fp1", ["a"])
        clock.advance(300.01)
        assert await cache_store.get("fp1") is None
        # Lazy: entry still held until sweep
        assert len(cache_store) == 1

    @pytest.mark.asyncio
    async def test_put_refreshes_timestamp(self, cache_store, clock):
        await cache_store.put("fp1", ["a"])
        clock.advance(200)
        await cache_store.put("fp1", ["a"])
        clock.advance(200)
        assert await cache_store.get("fp1") == ["a"]

    @pytest.mark.asyncio
    async def test_sweep_removes_only_expired(self, cache_store, clock):
        await cache_store.put("old", ["a"])
        clock.advance(250)
        await cache_store.put("young", ["b"])
        clock.advance(100)
        removed = await cache_store.sweep()
        assert removed == 1
        assert await cache_store.get("old") is None
        assert await cache_store.get("young") == ["b"]
        assert len(cache_store) == 1

    @pytest.mark.asyncio
    async def test_sweep_empty(self, cache_store):
        assert await cache_store.sweep() == 0

    @pytest.mark.asyncio
    async def test_delete_and_clear(self, cache_store):
        await cache_store.put("fp1", ["a"])
        await cache_store.put("fp2", ["b"])
        await cache_store.delete("fp1")
        await cache_store.delete("missing")
        assert await cache_store.get("fp1") is None
        await cache_store.clear()
        assert len(cache_store) == 0

    @pytest.mark.asyncio
    async def test_stats(self, cache_store, clock):
        await cache_store.put("fp1", ["a"])
        await cache_store.get("fp1")
        await cache_store.get("missing")
        clock.advance(301)
        await cache_store.sweep()
        stats = cache_store.stats()
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.expirations == 1
        assert stats.entries == 0
        assert stats.hit_rate == 0.5

    @pytest.mark.asyncio
    async def test_concurrent_tasks(self, cache_store):
        async def writer(i: int) -> None:
            await cache_store.put(f"fp{i % 5}", [str(i)])
            await cache_store.get(f"fp{i % 5}")
            await cache_store.sweep()

        await asyncio.gather(*(writer(i) for i in range(100)))
        assert len(cache_store) == 5

    def test_concurrent_threads(self):
        store = InMemoryCacheStore(ttl_seconds=60)
        errors: list[BaseException] = []

        def worker(n: int) -> None:
            try:
                for i in range(50):
                    asyncio.run(store.put(f"k{i % 10}", [f"{n}-{i}"]))
                    value = asyncio.run(store.get(f"k{i % 10}"))
                    assert value is not None and len(value) == 1
                    asyncio.run(store.sweep())
            except BaseException as e:  # pragma: no cover - surfaced below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(store) == 10


class TestNullCacheStore:
    @pytest.mark.asyncio
    async def test_never_stores(self):
        store = NullCacheStore()
        await store.put("fp", ["a"])
        assert await store.get("fp") is None
        assert await store.sweep() == 0
        assert store.stats().misses == 1
