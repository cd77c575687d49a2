"""Storage layer for the link shortener."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import LinkStoreBase
from .cache import RedisCache
from .memory import MemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore

__all__ = [
    "LinkStoreBase",
    "MemoryLinkStore",
    "PostgresLinkStore",
    "RedisCache",
    "Link",
    "create_store",
]


def create_store(
    database_url: str,
    pool_max_size: int = 10,
    connection_timeout_seconds: int = 30,
    logger: Optional[logging.Logger] = None,
) -> LinkStoreBase:
    """Build the store implementation named by the URL scheme.

    ``memory://`` selects the in-process store; ``postgres://`` and
    ``postgresql://`` select PostgreSQL.
    """
    scheme = urlparse(database_url).scheme
    if scheme == "memory":
        return MemoryLinkStore(database_url, logger=logger)
    if scheme in ("postgres", "postgresql"):
        return PostgresLinkStore(
            database_url,
            pool_max_size=pool_max_size,
            connection_timeout_seconds=connection_timeout_seconds,
            logger=logger,
        )
    raise ValueError(f"Unsupported database URL scheme: {scheme!r}")
