"""Tests for redirect resolution and click counting."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from shortlink.database.memory import MemoryLinkStore
from shortlink.errors import NotFoundError, StoreError
from shortlink.resolver import RedirectResolver


class FailingIncrementStore(MemoryLinkStore):
    async def increment_clicks(self, link_id, expected_clicks):
        raise StoreError("write failed")


class SlowIncrementStore(MemoryLinkStore):
    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()

    async def increment_clicks(self, link_id, expected_clicks):
        await self.release.wait()
        await super().increment_clicks(link_id, expected_clicks)


async def add_link(store, link_id="ab12cd", url="https://example.com"):
    await store.insert(link_id, url, datetime.now(timezone.utc))


@pytest.mark.asyncio
class TestRedirectResolver:
    """Test RedirectResolver."""

    async def test_resolve_returns_target(self, store):
        await add_link(store)
        resolver = RedirectResolver(store)

        assert await resolver.resolve("ab12cd") == "https://example.com"
        await resolver.drain()

    async def test_unknown_code_raises_not_found(self, store):
        resolver = RedirectResolver(store)

        with pytest.raises(NotFoundError):
            await resolver.resolve("nope00")
        assert resolver.pending == 0

    async def test_clicks_increment_per_resolution(self, store):
        await add_link(store)
        resolver = RedirectResolver(store)

        assert (await store.lookup("ab12cd")).clicks == 0
        await resolver.resolve("ab12cd")
        await resolver.drain()
        assert (await store.lookup("ab12cd")).clicks == 1
        await resolver.resolve("ab12cd")
        await resolver.drain()
        assert (await store.lookup("ab12cd")).clicks == 2

    async def test_increment_failure_is_swallowed(self):
        store = FailingIncrementStore()
        await add_link(store)
        resolver = RedirectResolver(store)

        assert await resolver.resolve("ab12cd") == "https://example.com"
        await resolver.drain()
        assert (await store.lookup("ab12cd")).clicks == 0

    async def test_resolution_does_not_wait_for_increment(self):
        store = SlowIncrementStore()
        await add_link(store)
        resolver = RedirectResolver(store)

        target = await asyncio.wait_for(resolver.resolve("ab12cd"), timeout=1)

        assert target == "https://example.com"
        assert resolver.pending == 1
        store.release.set()
        await resolver.drain()
        assert resolver.pending == 0
        assert (await store.lookup("ab12cd")).clicks == 1

    async def test_concurrent_resolutions_never_over_count(self, store):
        await add_link(store)
        resolver = RedirectResolver(store)
        n = 25

        targets = await asyncio.gather(*[resolver.resolve("ab12cd") for _ in range(n)])
        await resolver.drain()

        assert set(targets) == {"https://example.com"}
        clicks = (await store.lookup("ab12cd")).clicks
        assert 1 <= clicks <= n

    async def test_cache_hit_skips_lookup_but_counts_click(self, store):
        await add_link(store)
        cache = AsyncMock()
        cache.get_url.return_value = "https://example.com"
        resolver = RedirectResolver(store, cache=cache)

        assert await resolver.resolve("ab12cd") == "https://example.com"
        await resolver.drain()

        cache.set_url.assert_not_awaited()
        assert (await store.lookup("ab12cd")).clicks == 1

    async def test_cache_miss_fills_cache(self, store):
        await add_link(store)
        cache = AsyncMock()
        cache.get_url.return_value = None
        resolver = RedirectResolver(store, cache=cache)

        await resolver.resolve("ab12cd")
        await resolver.drain()

        cache.set_url.assert_awaited_once_with("ab12cd", "https://example.com")
