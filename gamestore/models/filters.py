"""Schemas used by the game filter pipeline and its API."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from gamestore.models.catalog import CatalogItem


class SortOption(str, Enum):
    """Named orderings accepted by the sorting stage."""

    MOST_POPULAR = "Most popular"
    MOST_COMMENTED = "Most commented"
    PRICE_ASC = "Price ASC"
    PRICE_DESC = "Price DESC"
    NEW = "New"


class PublishDateOption(str, Enum):
    """Relative publish-date windows accepted by the publish-date stage."""

    LAST_WEEK = "last week"
    LAST_MONTH = "last month"
    LAST_YEAR = "last year"
    TWO_YEARS = "2 years"
    THREE_YEARS = "3 years"


PAGE_SIZE_ALL = "all"

PAGINATION_OPTIONS: tuple[str, ...] = ("10", "20", "50", "100", PAGE_SIZE_ALL)
SORTING_OPTIONS: tuple[str, ...] = tuple(option.value for option in SortOption)
PUBLISH_DATE_OPTIONS: tuple[str, ...] = tuple(
    option.value for option in PublishDateOption
)


class FilterCriteria(BaseModel):
    """Constraints narrowing a catalog listing request.

    Built per request from query parameters. Values that cannot be parsed are
    coerced to their "absent" form so that the pipeline degrades to a no-op
    instead of rejecting the request.
    """

    genre_ids: frozenset[str] = Field(default_factory=frozenset)
    platform_ids: frozenset[str] = Field(default_factory=frozenset)
    publisher_ids: frozenset[str] = Field(default_factory=frozenset)
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    name: str | None = None
    publish_date: str | None = None
    sort: str | None = SortOption.NEW.value
    page_size: str | None = PAGINATION_OPTIONS[0]
    page: int = 1

    @field_validator("genre_ids", "platform_ids", "publisher_ids", mode="before")
    @classmethod
    def _drop_blank_ids(cls, value: Any) -> frozenset[str]:
        if not value:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(str(item).strip() for item in value if str(item).strip())

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _parse_price(cls, value: Any) -> Decimal | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            price = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        if not price.is_finite():
            return None
        return price

    @field_validator("name", "publish_date", "sort", "page_size", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("page", mode="before")
    @classmethod
    def _parse_page(cls, value: Any) -> int:
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return 1


class FilterResult(BaseModel):
    """One page of filtered catalog items."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    games: list[CatalogItem] = Field(default_factory=list)
    current_page: int = Field(1, ge=1)
    total_pages: int = Field(1, ge=1)
