import logging

import pytest

from service_relay.cache import CacheAside, TtlCache

from conftest import DummyCache, FakeClock


def test_ttl_cache_expires_entries() -> None:
    clock = FakeClock()
    cache = TtlCache(clock=clock)
    cache.set("user:1", {"id": 1}, ttl=300)

    clock.advance(299)
    assert cache.get("user:1") == {"id": 1}

    clock.advance(1)
    assert cache.get("user:1") is None
    assert len(cache) == 0


def test_ttl_cache_without_ttl_never_expires() -> None:
    clock = FakeClock()
    cache = TtlCache(clock=clock)
    cache.set("k", "v")
    clock.advance(10**6)
    assert "k" in cache


def test_ttl_cache_delete_and_prune() -> None:
    clock = FakeClock()
    cache = TtlCache(clock=clock)
    cache.set("a", 1, ttl=10)
    cache.set("b", 2, ttl=100)
    cache.set("c", 3)
    cache.delete("c")
    cache.delete("missing")

    clock.advance(50)
    assert cache.prune() == 1
    assert len(cache) == 1
    assert cache.get("b") == 2


def test_ttl_cache_rejects_negative_ttl() -> None:
    with pytest.raises(ValueError):
        TtlCache().set("k", "v", ttl=-1)


@pytest.mark.asyncio
async def test_primed_entry_skips_fetcher() -> None:
    store = DummyCache({"user:123": {"id": 123, "name": "John"}})
    accessor = CacheAside(store, ttl_s=300)

    async def fetcher():
        raise AssertionError("fetcher should not be called")

    assert await accessor.get("user:123", fetcher) == {"id": 123, "name": "John"}
    assert accessor.hits == 1
    assert accessor.misses == 0


@pytest.mark.asyncio
async def test_miss_populates_cache_for_next_read() -> None:
    store = DummyCache()
    accessor = CacheAside(store, ttl_s=300)
    calls = 0

    async def fetcher():
        nonlocal calls
        calls += 1
        return {"id": 7}

    assert await accessor.get("user:7", fetcher) == {"id": 7}
    assert await accessor.get("user:7", fetcher) == {"id": 7}
    assert calls == 1
    assert store.sets == [("user:7", {"id": 7}, 300)]


@pytest.mark.asyncio
async def test_invalidate_forces_refetch_before_expiry() -> None:
    clock = FakeClock()
    accessor = CacheAside(TtlCache(clock=clock), ttl_s=300)
    versions = iter(["v1", "v2"])

    async def fetcher():
        return next(versions)

    assert await accessor.get("k", fetcher) == "v1"
    accessor.invalidate("k")
    assert await accessor.get("k", fetcher) == "v2"


@pytest.mark.asyncio
async def test_expired_entry_is_refetched() -> None:
    clock = FakeClock()
    accessor = CacheAside(TtlCache(clock=clock), ttl_s=60)
    calls = 0

    async def fetcher():
        nonlocal calls
        calls += 1
        return calls

    await accessor.get("k", fetcher)
    clock.advance(61)
    assert await accessor.get("k", fetcher) == 2


@pytest.mark.asyncio
async def test_fetch_failure_propagates_and_caches_nothing() -> None:
    store = DummyCache()
    accessor = CacheAside(store, ttl_s=300)
    error = RuntimeError("API Error")

    async def fetcher():
        raise error

    with pytest.raises(RuntimeError) as excinfo:
        await accessor.get("user:1", fetcher)

    assert excinfo.value is error
    assert store.sets == []


@pytest.mark.asyncio
async def test_none_result_is_not_cached() -> None:
    store = DummyCache()
    accessor = CacheAside(store, ttl_s=300)

    async def fetcher():
        return None

    assert await accessor.get("k", fetcher) is None
    assert store.sets == []


def test_cache_aside_rejects_negative_ttl() -> None:
    with pytest.raises(ValueError):
        CacheAside(DummyCache(), ttl_s=-5)


@pytest.mark.asyncio
async def test_hits_and_misses_are_logged_at_debug(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="service_relay.cache")
    accessor = CacheAside(DummyCache(), ttl_s=300)

    async def fetcher():
        return "v"

    await accessor.get("user:5", fetcher)
    await accessor.get("user:5", fetcher)

    debug = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
    assert debug == ["Cache miss for user:5", "Cache hit for user:5"]
    assert not [r for r in caplog.records if r.levelno >= logging.INFO]
