"""Short-lived cache of the total number of games in the catalog."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from gamestore.services.storage.catalog_store import CatalogStore

logger = logging.getLogger(__name__)

TOTAL_GAMES_HEADER = "x-total-numbers-of-games"


class TotalGamesCache:
    """Remembers the catalog size for ``ttl_seconds`` before counting again."""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._total: int | None = None
        self._expires_at = 0.0

    async def get(self, store: CatalogStore) -> int:
        now = self._clock()
        if self._total is not None and now < self._expires_at:
            return self._total

        self._total = await store.count()
        self._expires_at = now + self._ttl_seconds
        logger.debug("Counted %d games in the catalog", self._total)
        return self._total

    def clear(self) -> None:
        self._total = None
        self._expires_at = 0.0
