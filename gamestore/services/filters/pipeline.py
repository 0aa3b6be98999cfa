"""Composition of the filter, sort and pagination stages."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime

from gamestore.models.catalog import CatalogItem
from gamestore.models.filters import FilterCriteria, FilterResult
from gamestore.services.filters.pagination import paginate_games
from gamestore.services.filters.sorting import sort_games
from gamestore.services.filters.stages import (
    filter_by_genres,
    filter_by_name,
    filter_by_platforms,
    filter_by_price,
    filter_by_publish_date,
    filter_by_publishers,
)

Stage = Callable[[Iterable[CatalogItem], FilterCriteria], Iterable[CatalogItem]]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class GameFilterPipeline:
    """Runs catalog items through the stages in a fixed order.

    The order is genre, platform, publisher, price, name, publish date and
    sort. Pagination is applied last and produces the :class:`FilterResult`.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or _utc_now

    def stages(self) -> Sequence[Stage]:
        """Return the ordered stages; the publish-date stage is bound to "now"."""
        return (
            filter_by_genres,
            filter_by_platforms,
            filter_by_publishers,
            filter_by_price,
            filter_by_name,
            functools.partial(filter_by_publish_date, now=self._clock()),
            sort_games,
        )

    def run(
        self, items: Iterable[CatalogItem], criteria: FilterCriteria
    ) -> FilterResult:
        """Filter, sort and paginate ``items`` according to ``criteria``."""
        filtered = functools.reduce(
            lambda current, stage: stage(current, criteria),
            self.stages(),
            items,
        )
        return paginate_games(filtered, criteria)
