"""Routes exposing the unified product view of both catalogs."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from gamestore.models.product import LegacyProduct, LegacyProductDocument, UnifiedProduct
from gamestore.services.exceptions import ProductNotFoundError
from gamestore.services.unified_products import UnifiedProductServiceDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get(
    "",
    response_model=list[UnifiedProduct],
    summary="List products from the game catalog and the legacy catalog",
)
async def list_products(
    service: UnifiedProductServiceDependency,
) -> list[UnifiedProduct]:
    return await service.list_products()


@router.post(
    "/legacy",
    response_model=LegacyProduct,
    status_code=status.HTTP_201_CREATED,
    summary="Register or update a product in the legacy catalog",
)
async def register_legacy_product(
    payload: LegacyProductDocument,
    service: UnifiedProductServiceDependency,
) -> LegacyProduct:
    logger.info(
        "Legacy product registration received for product %s", payload.product_id
    )
    return await service.register_legacy_product(payload)


@router.get(
    "/{key}",
    response_model=UnifiedProduct,
    summary="Look up a product by key in either catalog",
)
async def get_product(
    key: str,
    service: UnifiedProductServiceDependency,
) -> UnifiedProduct:
    try:
        return await service.get_product_by_key(key)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
