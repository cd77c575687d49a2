"""Business logic service for the link shortener."""

import logging
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone

from .allocator import IdentifierAllocator
from .resolver import RedirectResolver
from .shortcode import ShortCodeGenerator
from .database import create_store
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.models import Link
from .common.validators import is_valid_url, normalize_url
from .errors import DuplicateKeyError, NotFoundError, StoreError, ValidationError


class LinkService:
    """Service layer composing validation, allocation, storage and redirects."""

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_allocation_attempts: int = 10,
        fallback_code_length: int = 8,
        max_insert_attempts: int = 3,
    ):
        """Initialize link service.

        Args:
            store: Link store instance
            cache: Optional cache instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_allocation_attempts: Existence-checked candidates per allocation
            fallback_code_length: Length of the unchecked fallback identifier
            max_insert_attempts: Allocations to try when inserts hit DuplicateKeyError
        """
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.max_insert_attempts = max_insert_attempts
        self.allocator = IdentifierAllocator(
            store=store,
            generator=short_code_generator or ShortCodeGenerator(),
            max_attempts=max_allocation_attempts,
            fallback_length=fallback_code_length,
            logger=self.logger,
        )
        self.resolver = RedirectResolver(store=store, cache=cache, logger=self.logger)

    async def create_link(self, url: str) -> Link:
        """Shorten ``url`` after trimming surrounding whitespace and controls.

        Raises:
            ValidationError: If the URL is not an absolute http(s) URL
            StoreError: If the store fails, or every insert attempt collided
        """
        if isinstance(url, str):
            url = normalize_url(url)
        valid, error = is_valid_url(url)
        if not valid:
            raise ValidationError(ValidationError.INVALID_URL, detail=error)

        for attempt in range(1, self.max_insert_attempts + 1):
            link_id = await self.allocator.allocate()
            created_at = datetime.now(timezone.utc)

            try:
                await self.store.insert(link_id, url, created_at)
            except DuplicateKeyError:
                # Lost the check-then-insert race; allocate again
                self.logger.warning(
                    f"Insert collided on {link_id} (attempt {attempt}/{self.max_insert_attempts})"
                )
                continue

            if self.cache:
                await self.cache.set_url(link_id, url)

            self.logger.info(f"Created short URL: {link_id} -> {url}")
            return Link(id=link_id, url=url, clicks=0, created_at=created_at)

        raise StoreError(
            f"Unable to store link after {self.max_insert_attempts} identifier collisions"
        )

    async def resolve(self, link_id: str) -> str:
        """Return the redirect target for ``link_id``, counting a click."""
        return await self.resolver.resolve(link_id)

    async def get_link(self, link_id: str) -> Link:
        """Return the stored link without counting a click.

        Raises:
            NotFoundError: If the identifier was never issued
        """
        link = await self.store.lookup(link_id)
        if link is None:
            raise NotFoundError(link_id)
        return link

    async def list_recent(self, limit: int = 100) -> List[Link]:
        return await self.store.list_recent(limit)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics."""
        stats = await self.store.get_statistics()
        return {
            **stats,
            "cache_enabled": self.cache is not None and self.cache.enabled,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with database, cache and overall status
        """
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Flush pending click updates and close connections."""
        await self.resolver.drain()
        await self.store.close()
        if self.cache:
            await self.cache.close()


async def build_service(config, logger: Optional[logging.Logger] = None) -> LinkService:
    """Wire store, cache and service from a ``config.Config``."""
    logger = logger or logging.getLogger(__name__)

    store = create_store(
        config.database_url,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_timeout_seconds,
        logger=logger,
    )
    if config.create_tables:
        await store.ensure_schema()

    cache = None
    if config.redis_url:
        logger.info(f"Connecting to Redis at {config.redis_url}")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    return LinkService(
        store=store,
        cache=cache,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
        max_allocation_attempts=config.max_allocation_attempts,
        fallback_code_length=config.fallback_code_length,
        max_insert_attempts=config.max_insert_attempts,
    )
