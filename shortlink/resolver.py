"""Redirect resolution and fire-and-forget click counting."""

import asyncio
import logging
from typing import Optional, Set

from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .errors import NotFoundError


class RedirectResolver:
    """Resolve identifiers to target URLs and count clicks in the background.

    Click counts are best-effort. The increment runs as a detached task: the
    redirect never waits for it and its failures are only logged. Concurrent
    redirects of one identifier may lose increments but never over-count.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        # The event loop keeps only weak references to tasks
        self._pending: Set[asyncio.Task] = set()

    async def resolve(self, link_id: str) -> str:
        """Return the target URL for ``link_id`` and schedule a click.

        Raises:
            NotFoundError: If no link is stored under ``link_id``
            StoreError: If the lookup itself fails
        """
        if self.cache:
            cached_url = await self.cache.get_url(link_id)
            if cached_url:
                self.logger.debug(f"Cache hit for {link_id}")
                self._spawn(self._record_click(link_id))
                return cached_url

        link = await self.store.lookup(link_id)
        if link is None:
            self.logger.info(f"Short code not found: {link_id}")
            raise NotFoundError(link_id)

        if self.cache:
            await self.cache.set_url(link_id, link.url)

        self._spawn(self._increment(link_id, link.clicks))
        self.logger.debug(f"Resolved {link_id} -> {link.url}")
        return link.url

    @property
    def pending(self) -> int:
        """Number of click updates still in flight."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for in-flight click updates to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _increment(self, link_id: str, observed_clicks: int) -> None:
        try:
            await self.store.increment_clicks(link_id, observed_clicks)
        except Exception as e:
            self.logger.warning(f"Click increment failed for {link_id}: {e}")

    async def _record_click(self, link_id: str) -> None:
        # Cache hits carry no click count; read it before writing
        try:
            link = await self.store.lookup(link_id)
            if link is None:
                self.logger.warning(f"Cached link missing from store: {link_id}")
                return
            await self.store.increment_clicks(link_id, link.clicks)
        except Exception as e:
            self.logger.warning(f"Click increment failed for {link_id}: {e}")
