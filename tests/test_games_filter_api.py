"""HTTP tests for the games filter endpoints."""

from datetime import timedelta
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from gamestore.services.game_filter_service import get_game_filter_service


@pytest.mark.asyncio
async def test_filter_default_listing(client, catalog_store, make_game, now):
    for index in range(25):
        await catalog_store.save(
            make_game(f"Game {index:02d}", created_at=now - timedelta(hours=index))
        )

    response = await client.get("/api/games-filter")

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"games", "currentPage", "totalPages"}
    assert body["currentPage"] == 1
    assert body["totalPages"] == 3
    assert [game["name"] for game in body["games"]] == [f"Game {i:02d}" for i in range(10)]


@pytest.mark.asyncio
async def test_filter_serializes_games_in_camel_case(client, catalog_store, make_game):
    await catalog_store.save(
        make_game("Outer Wilds", price=Decimal("24.99"), units_in_stock=3, genre_ids={"b", "a"})
    )

    response = await client.get("/api/games-filter")

    game = response.json()["games"][0]
    assert game["key"] == "outer-wilds"
    assert game["price"] == 24.99
    assert game["unitsInStock"] == 3
    assert game["genreIds"] == ["a", "b"]
    assert "viewCount" in game
    assert "createdAt" in game


@pytest.mark.asyncio
async def test_filter_applies_query_parameters(client, catalog_store, make_game):
    await catalog_store.save(make_game("Cheap RPG", price=Decimal("5"), genre_ids={"rpg"}))
    await catalog_store.save(make_game("Dear RPG", price=Decimal("60"), genre_ids={"rpg"}))
    await catalog_store.save(make_game("Mid RPG", price=Decimal("25"), genre_ids={"rpg"}))
    await catalog_store.save(make_game("Mid Sim", price=Decimal("25"), genre_ids={"sim"}))

    response = await client.get(
        "/api/games-filter",
        params=[
            ("genres", "rpg"),
            ("genres", "puzzle"),
            ("minPrice", "10"),
            ("maxPrice", "100"),
            ("sort", "Price DESC"),
            ("pageCount", "all"),
        ],
    )

    assert response.status_code == 200
    assert [game["name"] for game in response.json()["games"]] == ["Dear RPG", "Mid RPG"]


@pytest.mark.asyncio
async def test_malformed_parameters_are_ignored(client, catalog_store, make_game):
    for index in range(3):
        await catalog_store.save(make_game(f"Game {index}"))

    response = await client.get(
        "/api/games-filter",
        params={
            "minPrice": "abc",
            "maxPrice": "",
            "pageCount": "many",
            "page": "first",
            "sort": "Sideways",
            "datePublishing": "someday",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["games"]) == 3
    assert body["currentPage"] == 1
    assert body["totalPages"] == 1


@pytest.mark.asyncio
async def test_page_out_of_range_is_clamped(client, catalog_store, make_game):
    for index in range(12):
        await catalog_store.save(make_game(f"Game {index}"))

    response = await client.get("/api/games-filter", params={"page": "40"})

    body = response.json()
    assert body["currentPage"] == 2
    assert len(body["games"]) == 2


@pytest.mark.asyncio
async def test_empty_catalog_returns_one_empty_page(client):
    response = await client.get("/api/games-filter", params={"name": "anything"})

    assert response.json() == {"games": [], "currentPage": 1, "totalPages": 1}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/api/games-filter/pagination-options", ["10", "20", "50", "100", "all"]),
        (
            "/api/games-filter/sorting-options",
            ["Most popular", "Most commented", "Price ASC", "Price DESC", "New"],
        ),
        (
            "/api/games-filter/publish-date-options",
            ["last week", "last month", "last year", "2 years", "3 years"],
        ),
    ],
)
async def test_option_endpoints(client, path, expected):
    response = await client.get(path)

    assert response.status_code == 200
    assert response.json() == expected


@pytest.mark.asyncio
async def test_increment_views(client, catalog_store, make_game):
    await catalog_store.save(make_game("Celeste", view_count=41))
    await catalog_store.save(make_game("Hollow Knight", view_count=10))

    response = await client.post("/api/games-filter/celeste/views")

    assert response.status_code == 200
    assert response.json()["viewCount"] == 42
    assert (await catalog_store.fetch_by_key("celeste")).view_count == 42
    assert (await catalog_store.fetch_by_key("hollow-knight")).view_count == 10


@pytest.mark.asyncio
async def test_increment_views_unknown_key(client):
    response = await client.post("/api/games-filter/unknown-key/views")

    assert response.status_code == 404
    assert response.json()["detail"] == "Game with key 'unknown-key' not found"


@pytest.mark.asyncio
async def test_unhandled_error_returns_error_response(catalog_store):
    from gamestore.main import app

    class BrokenService:
        async def get_filtered_games(self, criteria):
            raise RuntimeError("catalog exploded")

    app.dependency_overrides[get_game_filter_service] = lambda: BrokenService()
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://testserver",
        ) as test_client:
            response = await test_client.get("/api/games-filter")
    finally:
        app.dependency_overrides.pop(get_game_filter_service, None)

    assert response.status_code == 500
    body = response.json()
    assert body["errorId"]
    assert body["statusCode"] == 500
    assert "timestamp" in body
