from datetime import timedelta

import pytest

from roadmap_planner.services.memory_cache_service import MemoryCacheService


@pytest.mark.asyncio
async def test_set_get_delete():
    cache = MemoryCacheService(ttl_seconds=60)

    await cache.set("relevance:a:all", "reply")

    assert await cache.get("relevance:a:all") == "reply"
    assert await cache.exists("relevance:a:all")
    assert await cache.delete("relevance:a:all")
    assert not await cache.delete("relevance:a:all")
    assert await cache.get("relevance:a:all") is None


@pytest.mark.asyncio
async def test_expired_entries_disappear():
    cache = MemoryCacheService(ttl_seconds=60)

    await cache.set("k", "v", expire=timedelta(seconds=-1))

    assert await cache.get("k") is None
    assert not await cache.exists("k")


@pytest.mark.asyncio
async def test_zero_ttl_never_expires():
    cache = MemoryCacheService(ttl_seconds=0)

    await cache.set("k", "v")

    assert cache.expiry == {}
    assert await cache.get("k") == "v"


@pytest.mark.asyncio
async def test_clear_pattern_by_prefix():
    cache = MemoryCacheService()
    await cache.set("relevance:a:all", 1)
    await cache.set("relevance:b:all", 2)
    await cache.set("other", 3)

    assert await cache.clear_pattern("relevance:*") == 2
    assert await cache.get("other") == 3
