"""Pagination stage of the game filter pipeline."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from gamestore.config import settings
from gamestore.models.catalog import CatalogItem
from gamestore.models.filters import PAGE_SIZE_ALL, FilterCriteria, FilterResult

logger = logging.getLogger(__name__)


def resolve_page_size(page_size: str | None) -> int | None:
    """Return the numeric page size, or ``None`` when everything fits one page.

    A missing value falls back to the configured default. ``"all"`` and any
    value that is not a positive integer mean "no paging".
    """
    if page_size is None or not page_size.strip():
        return settings.DEFAULT_PAGE_SIZE
    text = page_size.strip()
    if text.lower() == PAGE_SIZE_ALL:
        return None
    try:
        size = int(text)
    except ValueError:
        logger.debug("Unparsable page size '%s', returning all games", page_size)
        return None
    return size if size > 0 else None


def paginate_games(
    items: Iterable[CatalogItem], criteria: FilterCriteria
) -> FilterResult:
    """Slice the sorted items into the requested page."""
    games = list(items)
    size = resolve_page_size(criteria.page_size)

    if size is None:
        return FilterResult(games=games, current_page=1, total_pages=1)

    total_pages = max(1, math.ceil(len(games) / size))
    current_page = min(max(1, criteria.page), total_pages)
    offset = (current_page - 1) * size

    logger.debug(
        "Pagination applied",
        extra={
            "total_games": len(games),
            "page_size": size,
            "total_pages": total_pages,
            "current_page": current_page,
        },
    )
    return FilterResult(
        games=games[offset : offset + size],
        current_page=current_page,
        total_pages=total_pages,
    )
