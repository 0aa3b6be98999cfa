"""Sorting stage of the game filter pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from gamestore.models.catalog import CatalogItem
from gamestore.models.filters import FilterCriteria, SortOption

logger = logging.getLogger(__name__)

_SORT_RULES: dict[SortOption, tuple[Callable[[CatalogItem], Any], bool]] = {
    SortOption.MOST_POPULAR: (lambda item: item.view_count, True),
    SortOption.MOST_COMMENTED: (lambda item: item.comment_count, True),
    SortOption.PRICE_ASC: (lambda item: item.price, False),
    SortOption.PRICE_DESC: (lambda item: item.price, True),
    SortOption.NEW: (lambda item: item.created_at, True),
}

_OPTIONS_BY_NAME = {option.value.casefold(): option for option in SortOption}


def resolve_sort_option(sort: str | None) -> SortOption | None:
    """Match a user supplied sort name, ignoring case and padding.

    Absent values mean the default ordering; unknown names return ``None``.
    """
    if sort is None or not sort.strip():
        return SortOption.NEW
    return _OPTIONS_BY_NAME.get(sort.strip().casefold())


def sort_games(
    items: Iterable[CatalogItem], criteria: FilterCriteria
) -> Iterable[CatalogItem]:
    """Order the items by the requested key.

    Sorting is stable, so ties keep their incoming order and sorting an
    already sorted sequence again is a no-op. An unrecognised sort key passes
    the items through untouched.
    """
    option = resolve_sort_option(criteria.sort)
    if option is None:
        logger.warning("Unknown sort option '%s', keeping current order", criteria.sort)
        return items

    key, descending = _SORT_RULES[option]
    logger.debug("Sorting games by %s", option.value)
    return sorted(items, key=key, reverse=descending)
