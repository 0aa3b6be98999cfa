"""Unified product models covering the relational and legacy catalogs."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class LegacyProductDocument(BaseModel):
    """Product record as persisted in the legacy catalog."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: int = Field(..., ge=0, description="Numeric identifier in the legacy catalog")
    product_name: str = Field(..., min_length=1)
    unit_price: Decimal | None = Field(None, ge=0)
    units_in_stock: int | None = Field(None, ge=0)
    quantity_per_unit: str | None = None
    discontinued: bool = False
    game_key: str | None = Field(
        None,
        description="Key of the matching game in the relational catalog, when known",
    )
    view_count: int = Field(0, ge=0)
    supplier_id: int | None = None
    category_id: int | None = None

    @field_serializer("unit_price")
    def _serialize_price(self, value: Decimal | None) -> float | None:
        return float(value) if value is not None else None


class _ProductBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    key: str | None = None
    name: str
    price: Decimal = Decimal("0")
    units_in_stock: int = 0
    discontinued: bool = False
    view_count: int = 0

    @field_serializer("price")
    def _serialize_price(self, value: Decimal) -> float:
        return float(value)


class SqlProduct(_ProductBase):
    """Product sourced from the relational game catalog."""

    source: Literal["sql"] = "sql"
    description: str = ""
    publisher_id: str | None = None


class LegacyProduct(_ProductBase):
    """Product sourced from the legacy document catalog."""

    source: Literal["legacy"] = "legacy"
    quantity_per_unit: str | None = None


UnifiedProduct = Annotated[SqlProduct | LegacyProduct, Field(discriminator="source")]
"""A product from either catalog, tagged by its ``source``."""
