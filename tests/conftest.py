"""Pytest configuration and fixtures for the catalog service."""

import uuid
from datetime import UTC, datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from fakeredis import aioredis as fakeredis
from httpx import ASGITransport, AsyncClient

from gamestore.models.catalog import CatalogItem
from gamestore.services.storage.catalog_store import (
    InMemoryCatalogStore,
    SqlCatalogStore,
    get_catalog_store,
)
from gamestore.services.storage.database import (
    create_catalog_engine,
    create_session_factory,
    get_catalog_engine,
    init_database,
)
from gamestore.services.storage.redis_client import get_redis_client

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture()
def now() -> datetime:
    """Fixed reference instant shared by the clock and the sample data."""
    return NOW


@pytest.fixture()
def make_game():
    """Return a factory building catalog items with sensible defaults."""

    def _make_game(name: str, **overrides) -> CatalogItem:
        values = {
            "id": str(uuid.uuid4()),
            "key": name.lower().replace(" ", "-"),
            "name": name,
            "description": f"{name} description",
            "price": Decimal("10.00"),
            "units_in_stock": 5,
            "created_at": NOW,
        }
        values.update(overrides)
        return CatalogItem(**values)

    return _make_game


@pytest.fixture()
def sql_engine():
    """Fresh in-memory SQLite catalog for each test."""
    engine = create_catalog_engine("sqlite://", echo=False)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def sql_store(sql_engine) -> SqlCatalogStore:
    return SqlCatalogStore(create_session_factory(sql_engine))


@pytest.fixture()
def catalog_store():
    """Swap the application catalog for an in-memory store."""
    from gamestore.main import app

    store = InMemoryCatalogStore()
    app.dependency_overrides[get_catalog_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_catalog_store, None)


@pytest_asyncio.fixture()
async def redis_client():
    """Provide a fake Redis client for each test."""
    from gamestore.main import app

    client = fakeredis.FakeRedis(decode_responses=True)
    app.dependency_overrides[get_redis_client] = lambda: client
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()
        app.dependency_overrides.pop(get_redis_client, None)


@pytest_asyncio.fixture()
async def client(catalog_store, redis_client, sql_engine):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from gamestore.main import app

    app.dependency_overrides[get_catalog_engine] = lambda: sql_engine
    app.state.total_games_cache.clear()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_catalog_engine, None)
