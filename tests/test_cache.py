"""Tests for the in-process TTL cache.

Tests cover:
- Hits inside the TTL window and misses after it
- Explicit invalidation and clearing
- The optional capacity bound
"""

import asyncio

import pytest

from app.core.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestExpiry:
    """Entries live for exactly the configured TTL."""

    @pytest.mark.asyncio
    async def test_get_returns_value_before_ttl(self):
        clock = FakeClock()
        cache = TTLCache(ttl=300, clock=clock)

        await cache.set("wishlist:u1", {"items": []})
        clock.advance(299.9)

        assert await cache.get("wishlist:u1") == {"items": []}

    @pytest.mark.asyncio
    async def test_get_misses_once_ttl_elapsed(self):
        clock = FakeClock()
        cache = TTLCache(ttl=300, clock=clock)

        await cache.set("wishlist:u1", "value")
        clock.advance(300)

        assert await cache.get("wishlist:u1") is None
        # Expired entry is dropped on read
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_set_refreshes_timestamp(self):
        clock = FakeClock()
        cache = TTLCache(ttl=10, clock=clock)

        await cache.set("k", "old")
        clock.advance(8)
        await cache.set("k", "new")
        clock.advance(8)

        assert await cache.get("k") == "new"

    @pytest.mark.asyncio
    async def test_unknown_key_is_miss(self):
        cache = TTLCache(ttl=10)

        assert await cache.get("product:nope") is None

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValueError):
            TTLCache(ttl=0)


class TestInvalidation:
    """delete and clear take effect immediately."""

    @pytest.mark.asyncio
    async def test_delete_causes_miss(self):
        cache = TTLCache(ttl=300)
        await cache.set("wishlist:u1", "value")

        assert await cache.delete("wishlist:u1") is True
        assert await cache.get("wishlist:u1") is None

    @pytest.mark.asyncio
    async def test_delete_missing_key(self):
        cache = TTLCache(ttl=300)

        assert await cache.delete("wishlist:ghost") is False

    @pytest.mark.asyncio
    async def test_clear_drops_everything(self):
        cache = TTLCache(ttl=300)
        await cache.set("wishlist:u1", 1)
        await cache.set("product:p1", 2)

        await cache.clear()

        assert len(cache) == 0
        assert await cache.get("product:p1") is None


class TestBoundedCache:
    """max_entries evicts expired entries first, then the oldest insertions."""

    @pytest.mark.asyncio
    async def test_unbounded_by_default(self):
        cache = TTLCache(ttl=300)
        for i in range(500):
            await cache.set(f"product:{i}", i)

        assert len(cache) == 500

    @pytest.mark.asyncio
    async def test_oldest_insertion_evicted(self):
        cache = TTLCache(ttl=300, max_entries=2)
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)

        assert await cache.get("a") is None
        assert await cache.get("b") == 2
        assert await cache.get("c") == 3

    @pytest.mark.asyncio
    async def test_reinserted_key_counts_as_newest(self):
        clock = FakeClock()
        cache = TTLCache(ttl=10, max_entries=2, clock=clock)
        await cache.set("live", 1)
        clock.advance(5)
        await cache.set("stale", 2)
        # Re-setting "live" makes "stale" the oldest insertion
        await cache.set("live", 1)
        clock.advance(6)
        await cache.set("new", 3)

        assert len(cache) == 2
        assert await cache.get("new") == 3
        assert await cache.get("live") == 1
        assert await cache.get("stale") is None

    @pytest.mark.asyncio
    async def test_expired_entry_makes_room(self):
        clock = FakeClock()
        cache = TTLCache(ttl=10, max_entries=2, clock=clock)
        await cache.set("old", 1)
        clock.advance(11)
        await cache.set("b", 2)
        await cache.set("c", 3)

        assert await cache.get("b") == 2
        assert await cache.get("c") == 3


class TestConcurrentAccess:
    """Many concurrent tasks hitting the same cache leave it consistent."""

    @pytest.mark.asyncio
    async def test_concurrent_set_get_delete(self):
        cache = TTLCache(ttl=300)

        async def worker(n):
            key = f"wishlist:u{n % 10}"
            await cache.set(key, n)
            await cache.get(key)
            if n % 3 == 0:
                await cache.delete(key)

        await asyncio.gather(*(worker(n) for n in range(200)))

        assert len(cache) <= 10
        for i in range(10):
            value = await cache.get(f"wishlist:u{i}")
            assert value is None or value % 10 == i
