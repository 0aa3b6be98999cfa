"""Service exposing the filtered game listing and its options."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends

from gamestore.models.catalog import CatalogItem
from gamestore.models.filters import (
    PAGINATION_OPTIONS,
    PUBLISH_DATE_OPTIONS,
    SORTING_OPTIONS,
    FilterCriteria,
    FilterResult,
)
from gamestore.services.exceptions import GameNotFoundError
from gamestore.services.filters.pipeline import GameFilterPipeline
from gamestore.services.storage.catalog_store import CatalogStore, get_catalog_store

logger = logging.getLogger(__name__)


class GameFilterService:
    """Loads the catalog and runs it through the filter pipeline.

    Every listing call fetches the full catalog once and is otherwise
    stateless. :meth:`increment_view_count` is the only operation with a side
    effect.
    """

    def __init__(
        self,
        store: CatalogStore,
        pipeline: GameFilterPipeline | None = None,
    ) -> None:
        self._store = store
        self._pipeline = pipeline or GameFilterPipeline()

    async def get_filtered_games(self, criteria: FilterCriteria) -> FilterResult:
        logger.info(
            "Getting filtered games",
            extra={"criteria": criteria.model_dump(mode="json")},
        )
        games = await self._store.fetch_all()
        result = self._pipeline.run(games, criteria)
        logger.info(
            "Filtered %d games into page %d of %d",
            len(games),
            result.current_page,
            result.total_pages,
        )
        return result

    async def increment_view_count(self, key: str) -> CatalogItem:
        """Add one view to the game with ``key``.

        Raises:
            GameNotFoundError: If no game has that key.
        """
        logger.info("Incrementing view count for game with key: %s", key)
        game = await self._store.fetch_by_key(key)
        if game is None:
            logger.warning("Game with key: %s not found", key)
            raise GameNotFoundError(key)

        updated = await self._store.save(
            game.model_copy(update={"view_count": game.view_count + 1})
        )
        logger.info("View count for game %s is now %d", key, updated.view_count)
        return updated

    @staticmethod
    def get_pagination_options() -> list[str]:
        return list(PAGINATION_OPTIONS)

    @staticmethod
    def get_sorting_options() -> list[str]:
        return list(SORTING_OPTIONS)

    @staticmethod
    def get_publish_date_options() -> list[str]:
        return list(PUBLISH_DATE_OPTIONS)


def get_game_filter_service(
    store: Annotated[CatalogStore, Depends(get_catalog_store)],
) -> GameFilterService:
    """FastAPI dependency factory."""

    return GameFilterService(store)


GameFilterServiceDependency = Annotated[
    GameFilterService, Depends(get_game_filter_service)
]
