"""Redis-backed persistence for the legacy product catalog."""

from __future__ import annotations

import logging
from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from gamestore.config import settings
from gamestore.models.product import LegacyProductDocument
from gamestore.services.storage.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class LegacyProductStore:
    """Keeps legacy product documents as JSON values of a single Redis hash.

    Hash fields are the numeric ``product_id`` values.
    """

    def __init__(self, client: redis.Redis, hash_key: str) -> None:
        self._client = client
        self._hash_key = hash_key

    async def list_products(self) -> list[LegacyProductDocument]:
        raw_entries = await self._client.hgetall(self._hash_key)
        documents = [
            LegacyProductDocument.model_validate_json(raw)
            for raw in raw_entries.values()
        ]
        return sorted(documents, key=lambda doc: doc.product_id)

    async def get(self, product_id: int) -> LegacyProductDocument | None:
        raw = await self._client.hget(self._hash_key, str(product_id))
        if not raw:
            return None
        return LegacyProductDocument.model_validate_json(raw)

    async def find_by_game_key(self, game_key: str) -> LegacyProductDocument | None:
        for document in await self.list_products():
            if document.game_key == game_key:
                return document
        return None

    async def find_by_name(self, name: str) -> LegacyProductDocument | None:
        wanted = name.casefold()
        for document in await self.list_products():
            if document.product_name.casefold() == wanted:
                return document
        return None

    async def upsert(self, document: LegacyProductDocument) -> LegacyProductDocument:
        await self._client.hset(
            self._hash_key,
            str(document.product_id),
            document.model_dump_json(),
        )
        logger.info(
            "Stored legacy product %s (%s)",
            document.product_id,
            document.product_name,
        )
        return document


def get_legacy_product_store(
    client: Annotated[redis.Redis, Depends(get_redis_client)],
) -> LegacyProductStore:
    """FastAPI dependency factory."""

    return LegacyProductStore(client, settings.LEGACY_PRODUCTS_KEY)
