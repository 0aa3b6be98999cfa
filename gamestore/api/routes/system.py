"""System-level routes such as health checks."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import redis.asyncio as redis
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine

from gamestore.config import settings
from gamestore.services.storage.database import get_catalog_engine
from gamestore.services.storage.redis_client import get_redis_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "Hello World"}


@router.get("/health")
async def health_check(
    engine: Annotated[Engine, Depends(get_catalog_engine)],
    client: Annotated[redis.Redis, Depends(get_redis_client)],
) -> dict[str, str]:
    """Health check endpoint reporting database and Redis connectivity."""

    try:
        await asyncio.to_thread(_ping_database, engine)
        database_status = "connected"
    except Exception:
        logger.warning("Catalog database unreachable", exc_info=True)
        database_status = "disconnected"

    try:
        await client.ping()
        redis_status = "connected"
    except Exception:
        logger.warning("Redis unreachable", exc_info=True)
        redis_status = "disconnected"

    return {
        "status": "healthy",
        "database": database_status,
        "redis": redis_status,
        "environment": settings.ENVIRONMENT,
    }


def _ping_database(engine: Engine) -> None:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
