"""Identifier allocation with bounded collision retries."""

import logging
from typing import Optional

from .database.base import LinkStoreBase
from .shortcode import ShortCodeGenerator


class IdentifierAllocator:
    """Pick an identifier that the store does not yet hold.

    Known TOCTOU gap: nothing is locked between ``exists()`` here and the
    caller's ``insert()``. Two concurrent requests can both see the same
    candidate as free; the store's primary key rejects the second insert with
    DuplicateKeyError, which the caller treats as a signal to allocate again.

    The fallback identifier returned after ``max_attempts`` collisions is NOT
    checked for existence. It is longer, so a clash is far less likely, but
    uniqueness is again only enforced by the insert.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 10,
        fallback_length: int = 8,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize allocator.

        Args:
            store: Link store used for existence checks
            generator: Short code generator (6 characters by default)
            max_attempts: Checked candidates to try before falling back
            fallback_length: Length of the unchecked fallback identifier
            logger: Optional logger
        """
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.fallback_length = fallback_length
        self.logger = logger or logging.getLogger(__name__)

    async def allocate(self) -> str:
        """Return an identifier for a new link.

        Raises:
            StoreUnavailableError: If an existence check cannot reach the store
        """
        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate_random()

            if not await self.store.exists(code):
                if attempt > 1:
                    self.logger.debug(f"Allocated {code} after {attempt} attempts")
                return code

            self.logger.debug(f"Identifier collision on attempt {attempt}: {code}")

        code = self.generator.generate_random(length=self.fallback_length)
        self.logger.warning(
            f"{self.max_attempts} collisions in a row; using unchecked "
            f"{self.fallback_length}-character identifier {code}"
        )
        return code
