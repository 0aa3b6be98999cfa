"""Routes for browsing the game catalog with filters, sorting and paging."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from gamestore.models.catalog import CatalogItem
from gamestore.models.filters import FilterCriteria, FilterResult
from gamestore.services.exceptions import GameNotFoundError
from gamestore.services.game_filter_service import GameFilterServiceDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/games-filter", tags=["games-filter"])


def get_filter_criteria(
    genres: Annotated[list[str] | None, Query(description="Genre ids")] = None,
    platforms: Annotated[list[str] | None, Query(description="Platform ids")] = None,
    publishers: Annotated[list[str] | None, Query(description="Publisher ids")] = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
    date_publishing: Annotated[str | None, Query(alias="datePublishing")] = None,
    name: Annotated[str | None, Query(description="Name substring")] = None,
    sort: Annotated[str | None, Query()] = "New",
    page_count: Annotated[str | None, Query(alias="pageCount")] = "10",
    page: Annotated[str | None, Query()] = "1",
) -> FilterCriteria:
    """Bind query parameters leniently; bad values never cause a 422."""

    return FilterCriteria(
        genre_ids=genres,
        platform_ids=platforms,
        publisher_ids=publishers,
        min_price=min_price,
        max_price=max_price,
        publish_date=date_publishing,
        name=name,
        sort=sort,
        page_size=page_count,
        page=page,
    )


CriteriaDependency = Annotated[FilterCriteria, Depends(get_filter_criteria)]


@router.get(
    "",
    response_model=FilterResult,
    summary="List games matching the filters, sorted and paginated",
)
async def get_filtered_games(
    criteria: CriteriaDependency,
    service: GameFilterServiceDependency,
) -> FilterResult:
    return await service.get_filtered_games(criteria)


@router.get(
    "/pagination-options",
    summary="Page sizes accepted by the pageCount parameter",
)
async def get_pagination_options(service: GameFilterServiceDependency) -> list[str]:
    return service.get_pagination_options()


@router.get(
    "/sorting-options",
    summary="Sort names accepted by the sort parameter",
)
async def get_sorting_options(service: GameFilterServiceDependency) -> list[str]:
    return service.get_sorting_options()


@router.get(
    "/publish-date-options",
    summary="Publish date windows accepted by the datePublishing parameter",
)
async def get_publish_date_options(service: GameFilterServiceDependency) -> list[str]:
    return service.get_publish_date_options()


@router.post(
    "/{key}/views",
    response_model=CatalogItem,
    status_code=status.HTTP_200_OK,
    summary="Record one view of a game",
)
async def increment_view_count(
    service: GameFilterServiceDependency,
    key: str = Path(..., description="External key of the game"),
) -> CatalogItem:
    try:
        return await service.increment_view_count(key)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
