"""Tests for the Redis cache wrapper."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shortlink.database.cache import RedisCache


@pytest.fixture
def cache(logger):
    cache = RedisCache(redis_url="redis://localhost:6379/0", ttl_seconds=60, logger=logger)
    cache.client = AsyncMock()
    return cache


@pytest.mark.asyncio
class TestRedisCache:

    async def test_get_url(self, cache):
        cache.client.get.return_value = "https://example.com"

        assert await cache.get_url("ab12cd") == "https://example.com"
        cache.client.get.assert_awaited_once_with("shortlink:url:ab12cd")

    async def test_set_url_uses_ttl(self, cache):
        assert await cache.set_url("ab12cd", "https://example.com")
        cache.client.setex.assert_awaited_once_with("shortlink:url:ab12cd", 60, "https://example.com")

    async def test_errors_read_as_miss(self, cache):
        cache.client.get.side_effect = RedisConnectionError("down")
        cache.client.setex.side_effect = RedisConnectionError("down")

        assert await cache.get_url("ab12cd") is None
        assert await cache.set_url("ab12cd", "https://example.com") is False

    async def test_disabled_without_url(self, logger):
        cache = RedisCache(redis_url=None, logger=logger)
        await cache.connect()

        assert not cache.enabled
        assert await cache.get_url("ab12cd") is None
        assert await cache.set_url("ab12cd", "https://example.com") is False

    async def test_ping(self, cache):
        cache.client.ping.return_value = True
        assert await cache.ping()

        cache.client.ping.side_effect = RedisConnectionError("down")
        assert not await cache.ping()

    async def test_close(self, cache):
        client = cache.client

        await cache.close()

        client.aclose.assert_awaited_once()
        assert cache.client is None


@pytest.mark.asyncio
async def test_service_primes_cache_on_create(store, logger):
    from shortlink.service import LinkService

    cache = AsyncMock()
    cache.enabled = True
    service = LinkService(store, cache=cache, logger=logger)

    link = await service.create_link("https://example.com")

    cache.set_url.assert_awaited_once_with(link.id, "https://example.com")
    assert (await service.get_statistics())["cache_enabled"] is True
