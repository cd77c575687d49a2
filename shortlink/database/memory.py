"""In-process link store.

Keeps links in a dictionary. Every operation yields to the event loop once
before touching state, so concurrent request handlers interleave around store
calls the way they do against a networked database.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..errors import DuplicateKeyError
from .base import LinkStoreBase
from .models import Link


class MemoryLinkStore(LinkStoreBase):
    """Dictionary-backed store for development and tests."""

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}

    async def exists(self, link_id: str) -> bool:
        await asyncio.sleep(0)
        return link_id in self._links

    async def insert(self, link_id: str, url: str, created_at: datetime) -> None:
        await asyncio.sleep(0)
        if link_id in self._links:
            raise DuplicateKeyError(link_id)
        self._links[link_id] = Link(id=link_id, url=url, clicks=0, created_at=created_at)
        self.logger.debug(f"Inserted link {link_id}")

    async def lookup(self, link_id: str) -> Optional[Link]:
        await asyncio.sleep(0)
        link = self._links.get(link_id)
        if link is None:
            return None
        # Hand out a copy; the store owns the stored record
        return Link(id=link.id, url=link.url, clicks=link.clicks, created_at=link.created_at)

    async def increment_clicks(self, link_id: str, expected_clicks: int) -> None:
        await asyncio.sleep(0)
        link = self._links.get(link_id)
        if link is None:
            self.logger.warning(f"Cannot increment clicks - link not found: {link_id}")
            return
        link.clicks = max(link.clicks, expected_clicks + 1)

    async def ensure_schema(self) -> None:
        return None

    async def list_recent(self, limit: int = 100) -> List[Link]:
        await asyncio.sleep(0)
        ordered = sorted(self._links.values(), key=lambda link: link.created_at, reverse=True)
        return [
            Link(id=link.id, url=link.url, clicks=link.clicks, created_at=link.created_at)
            for link in ordered[:limit]
        ]

    async def get_statistics(self) -> Dict[str, Any]:
        await asyncio.sleep(0)
        return {
            "total_links": len(self._links),
            "total_clicks": sum(link.clicks for link in self._links.values()),
            "database": "memory",
        }

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        return None
