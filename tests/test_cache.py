"""Tests for the in-process TTL cache."""

from unittest.mock import AsyncMock

import pytest

from startup_helper.core.cache import TTLCache, generate_key


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(default_ttl=60, clock=clock)


class TestTTLCache:
    def test_get_before_expiry(self, cache, clock):
        cache.set("k", "v")
        clock.advance(59)
        assert cache.get("k") == "v"

    def test_expires(self, cache, clock):
        cache.set("k", "v")
        clock.advance(60)
        assert cache.get("k") is None
        assert cache.stats()["size"] == 0

    def test_per_entry_ttl(self, cache, clock):
        cache.set("short", 1, ttl=10)
        cache.set("long", 2, ttl=100)
        clock.advance(50)
        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_delete_by_prefix(self, cache):
        cache.set("coords:a", 1)
        cache.set("coords:b", 2)
        cache.set("semas:a", 3)
        assert cache.delete_by_prefix("coords:") == 2
        assert cache.get("semas:a") == 3

    def test_purge_expired(self, cache, clock):
        cache.set("a", 1, ttl=10)
        cache.set("b", 2, ttl=100)
        clock.advance(20)
        assert cache.purge_expired() == 1
        assert cache.stats()["size"] == 1

    def test_set_sweeps_expired_entries(self, clock):
        cache = TTLCache(default_ttl=60, clock=clock)
        for i in range(1000):
            cache.set(f"coords:{i}", i, ttl=1)
        clock.advance(10_000)
        for i in range(10):
            cache.set(f"kakao:{i}", i)
        assert cache.stats()["size"] == 10

    def test_sweep_waits_for_interval(self, clock):
        cache = TTLCache(default_ttl=60, clock=clock, purge_interval=600)
        cache.set("a", 1, ttl=1)
        clock.advance(100)
        cache.set("b", 2, ttl=1000)
        assert cache.stats()["size"] == 2
        clock.advance(500)
        cache.set("c", 3)
        # "b" is still live, "a" expired and was swept
        assert cache.stats()["size"] == 2
        assert cache.get("b") == 2

    def test_stats(self, cache):
        cache.set("a", 1)
        cache.get("a")
        cache.get("missing")
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5

    @pytest.mark.asyncio
    async def test_get_or_set_calls_factory_once(self, cache):
        factory = AsyncMock(return_value={"lat": 37.5})
        first = await cache.get_or_set("coords:x", factory)
        second = await cache.get_or_set("coords:x", factory)
        assert first == second == {"lat": 37.5}
        factory.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_none_is_not_cached(self, cache):
        factory = AsyncMock(return_value=None)
        await cache.get_or_set("coords:nowhere", factory)
        await cache.get_or_set("coords:nowhere", factory)
        assert factory.await_count == 2


class TestGenerateKey:
    def test_order_independent(self):
        assert generate_key("semas", {"a": 1, "b": 2}) == generate_key("semas", {"b": 2, "a": 1})

    def test_prefixed(self):
        key = generate_key("kakao", {"q": "강남역"})
        assert key.startswith("kakao:")
        assert len(key) == len("kakao:") + 16

    def test_distinct_params(self):
        assert generate_key("kakao", {"q": "강남역"}) != generate_key("kakao", {"q": "홍대입구"})
