"""Catalog item domain model shared by the stores, services and API."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class CatalogItem(BaseModel):
    """A purchasable game as stored in the relational catalog."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Opaque identifier of the game")
    key: str = Field(..., min_length=1, description="Unique external key of the game")
    name: str
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    units_in_stock: int = Field(default=0, ge=0)
    discontinued: bool = False
    publisher_id: str | None = None
    genre_ids: frozenset[str] = Field(default_factory=frozenset)
    platform_ids: frozenset[str] = Field(default_factory=frozenset)
    view_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive timestamps
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @field_serializer("price")
    def _serialize_price(self, value: Decimal) -> float:
        return float(value)

    @field_serializer("genre_ids", "platform_ids")
    def _serialize_ids(self, value: frozenset[str]) -> list[str]:
        return sorted(value)
