"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from datetime import datetime

from .models import Link


class LinkStoreBase(ABC):
    """Persistence contract consumed by the shortener core.

    Implementations must give read-your-writes consistency for a single
    identifier: a lookup that follows a successful insert of the same id
    observes it.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def exists(self, link_id: str) -> bool:
        """Check whether an identifier is already allocated.

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """

    @abstractmethod
    async def insert(self, link_id: str, url: str, created_at: datetime) -> None:
        """Persist a new link with a zero click count.

        Raises:
            DuplicateKeyError: If link_id is already stored
            StoreError: On any other persistence failure
        """

    @abstractmethod
    async def lookup(self, link_id: str) -> Optional[Link]:
        """Return the stored link, or None if absent.

        Raises:
            StoreError: If the lookup itself fails
        """

    @abstractmethod
    async def increment_clicks(self, link_id: str, expected_clicks: int) -> None:
        """Record one more click given the count the caller last observed.

        The stored value becomes max(current, expected_clicks + 1). Concurrent
        callers that observed the same count collapse into one increment, which
        is accepted; the counter never moves backwards.
        """

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create the links table if it does not exist."""

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> List[Link]:
        """List links, newest first."""

    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Return total_links, total_clicks and the backend name."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the store answers queries."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
