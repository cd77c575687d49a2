"""Redis cache for identifier -> URL lookups.

Links are never edited, deleted or reissued, so a cached URL can never go
stale. Any Redis failure is logged and reported as a miss.
"""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError


class RedisCache:
    """Read-through cache in front of the link store."""

    KEY_PREFIX = "shortlink:url:"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: TTL for cached URLs
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

        if redis_url:
            self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis; disables the cache if the server does not answer."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except (RedisError, OSError) as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    def get_cache_key(self, link_id: str) -> str:
        return f"{self.KEY_PREFIX}{link_id}"

    async def get_url(self, link_id: str) -> Optional[str]:
        """Return the cached URL for ``link_id`` or None."""
        if not self.enabled or not self.client:
            return None

        try:
            return await self.client.get(self.get_cache_key(link_id))
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache get error: {e}")
            return None

    async def set_url(self, link_id: str, url: str) -> bool:
        """Cache ``url`` under ``link_id``. Returns True on success."""
        if not self.enabled or not self.client:
            return False

        try:
            await self.client.setex(self.get_cache_key(link_id), self.ttl_seconds, url)
            return True
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        if not self.enabled or not self.client:
            return False
        try:
            return bool(await self.client.ping())
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
