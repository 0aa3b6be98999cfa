"""HTTP tests for the unified product endpoints."""

from decimal import Decimal

import pytest

from gamestore.config import settings
from gamestore.models.product import LegacyProductDocument
from gamestore.services.storage.legacy_products import LegacyProductStore


@pytest.fixture()
def legacy_store(redis_client) -> LegacyProductStore:
    return LegacyProductStore(redis_client, settings.LEGACY_PRODUCTS_KEY)


@pytest.mark.asyncio
async def test_list_products_tags_each_source(client, catalog_store, legacy_store, make_game):
    await catalog_store.save(make_game("Chai", price=Decimal("18")))
    await legacy_store.upsert(LegacyProductDocument(product_id=1, product_name="chai"))
    await legacy_store.upsert(
        LegacyProductDocument(product_id=2, product_name="Chang", unit_price=Decimal("19"))
    )

    response = await client.get("/api/products")

    assert response.status_code == 200
    body = response.json()
    assert [(item["source"], item["name"]) for item in body] == [
        ("sql", "Chai"),
        ("legacy", "Chang"),
    ]
    assert body[0]["price"] == 18.0
    assert body[1]["price"] == 19.0
    assert "publisherId" in body[0]
    assert "quantityPerUnit" in body[1]


@pytest.mark.asyncio
async def test_register_legacy_product(client, legacy_store):
    response = await client.post(
        "/api/products/legacy",
        json={
            "productId": 77,
            "productName": "Gravad lax",
            "unitPrice": 26,
            "unitsInStock": 11,
            "quantityPerUnit": "12 - 500 g pkgs.",
            "gameKey": "gravad-lax",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["source"] == "legacy"
    assert body["id"] == "77"
    assert body["key"] == "gravad-lax"
    assert body["unitsInStock"] == 11
    stored = await legacy_store.get(77)
    assert stored.quantity_per_unit == "12 - 500 g pkgs."


@pytest.mark.asyncio
async def test_register_legacy_product_validates_payload(client):
    response = await client.post("/api/products/legacy", json={"productName": "No id"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_product_by_key(client, catalog_store, legacy_store, make_game):
    await catalog_store.save(make_game("Tofu"))
    await legacy_store.upsert(LegacyProductDocument(product_id=14, product_name="Konbu"))

    sql_response = await client.get("/api/products/tofu")
    legacy_response = await client.get("/api/products/14")

    assert sql_response.status_code == 200
    assert sql_response.json()["source"] == "sql"
    assert legacy_response.status_code == 200
    assert legacy_response.json()["name"] == "Konbu"


@pytest.mark.asyncio
async def test_get_unknown_product_returns_404(client):
    response = await client.get("/api/products/ghost")

    assert response.status_code == 404
    assert response.json()["detail"] == "Product with key 'ghost' not found"


@pytest.mark.asyncio
async def test_get_product_with_superscript_digit_returns_404(client, legacy_store):
    await legacy_store.upsert(LegacyProductDocument(product_id=2, product_name="Chang"))

    response = await client.get("/api/products/%C2%B2")

    assert response.status_code == 404
    assert response.json()["detail"] == "Product with key '²' not found"
