"""Unified view over the relational game catalog and the legacy catalog."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Annotated

from fastapi import Depends

from gamestore.models.catalog import CatalogItem
from gamestore.models.product import (
    LegacyProduct,
    LegacyProductDocument,
    SqlProduct,
    UnifiedProduct,
)
from gamestore.services.exceptions import ProductNotFoundError
from gamestore.services.storage.catalog_store import CatalogStore, get_catalog_store
from gamestore.services.storage.legacy_products import (
    LegacyProductStore,
    get_legacy_product_store,
)

logger = logging.getLogger(__name__)


def product_from_catalog_item(item: CatalogItem) -> SqlProduct:
    """Map a relational catalog game onto the unified product shape."""
    return SqlProduct(
        id=item.id,
        key=item.key,
        name=item.name,
        description=item.description,
        price=item.price,
        units_in_stock=item.units_in_stock,
        discontinued=item.discontinued,
        view_count=item.view_count,
        publisher_id=item.publisher_id,
    )


def product_from_legacy_document(document: LegacyProductDocument) -> LegacyProduct:
    """Map a legacy catalog document onto the unified product shape."""
    return LegacyProduct(
        id=str(document.product_id),
        key=document.game_key,
        name=document.product_name,
        price=document.unit_price if document.unit_price is not None else Decimal("0"),
        units_in_stock=document.units_in_stock or 0,
        discontinued=document.discontinued,
        view_count=document.view_count,
        quantity_per_unit=document.quantity_per_unit,
    )


def merge_products(
    sql_products: Iterable[SqlProduct],
    legacy_products: Iterable[LegacyProduct],
) -> list[UnifiedProduct]:
    """Combine both catalogs, dropping legacy entries already known by name.

    Relational products always win; names are compared case-insensitively.
    """
    merged: list[UnifiedProduct] = list(sql_products)
    seen_names = {product.name.casefold() for product in merged}
    for product in legacy_products:
        name = product.name.casefold()
        if name in seen_names:
            continue
        seen_names.add(name)
        merged.append(product)
    return merged


class UnifiedProductService:
    """Reads products from both catalogs and presents them as one list."""

    def __init__(self, catalog: CatalogStore, legacy: LegacyProductStore) -> None:
        self._catalog = catalog
        self._legacy = legacy

    async def list_products(self) -> list[UnifiedProduct]:
        logger.info("Fetching all products from both catalogs")
        games = await self._catalog.fetch_all()
        documents = await self._legacy.list_products()
        products = merge_products(
            (product_from_catalog_item(game) for game in games),
            (product_from_legacy_document(doc) for doc in documents),
        )
        logger.info(
            "Fetched %d unified products",
            len(products),
            extra={"sql_count": len(games), "legacy_count": len(documents)},
        )
        return products

    async def get_product_by_key(self, key: str) -> UnifiedProduct:
        """Find a product by game key, falling back through the legacy catalog.

        The lookup order is the relational key, the legacy game key, the legacy
        product name and finally the legacy numeric product id.

        Raises:
            ProductNotFoundError: If neither catalog knows the key.
        """
        game = await self._catalog.fetch_by_key(key)
        if game is not None:
            return product_from_catalog_item(game)

        document = await self._legacy.find_by_game_key(key)
        if document is None:
            document = await self._legacy.find_by_name(key)
        if document is None and key.isdecimal():
            document = await self._legacy.get(int(key))
        if document is not None:
            return product_from_legacy_document(document)

        logger.info("Product not found in any catalog with key: %s", key)
        raise ProductNotFoundError(key)

    async def register_legacy_product(
        self, document: LegacyProductDocument
    ) -> LegacyProduct:
        stored = await self._legacy.upsert(document)
        return product_from_legacy_document(stored)


def get_unified_product_service(
    catalog: Annotated[CatalogStore, Depends(get_catalog_store)],
    legacy: Annotated[LegacyProductStore, Depends(get_legacy_product_store)],
) -> UnifiedProductService:
    """FastAPI dependency factory."""

    return UnifiedProductService(catalog, legacy)


UnifiedProductServiceDependency = Annotated[
    UnifiedProductService, Depends(get_unified_product_service)
]
