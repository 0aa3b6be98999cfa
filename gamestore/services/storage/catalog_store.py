"""Catalog store abstractions and implementations."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from decimal import Decimal
from threading import RLock

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from gamestore.models.catalog import CatalogItem
from gamestore.services.storage.database import (
    GameRecord,
    GenreRecord,
    PlatformRecord,
    PublisherRecord,
    create_session_factory,
    get_catalog_engine,
)

logger = logging.getLogger(__name__)


class CatalogStore(ABC):
    """Abstract access to the game catalog."""

    @abstractmethod
    async def fetch_all(self) -> list[CatalogItem]:
        """Return every catalog item with its genre and platform links."""

    @abstractmethod
    async def fetch_by_key(self, key: str) -> CatalogItem | None:
        """Return the item with the given external key, if any."""

    @abstractmethod
    async def save(self, item: CatalogItem) -> CatalogItem:
        """Insert or update ``item`` and return the stored version."""

    async def count(self) -> int:
        """Return the number of games in the whole catalog."""
        return len(await self.fetch_all())


class InMemoryCatalogStore(CatalogStore):
    """Naive in-memory catalog used for demos and tests."""

    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        self._lock = RLock()
        self._storage: dict[str, CatalogItem] = {}
        for item in items:
            self._put(item)

    async def fetch_all(self) -> list[CatalogItem]:
        with self._lock:
            return list(self._storage.values())

    async def fetch_by_key(self, key: str) -> CatalogItem | None:
        with self._lock:
            return next(
                (item for item in self._storage.values() if item.key == key), None
            )

    async def save(self, item: CatalogItem) -> CatalogItem:
        self._put(item)
        logger.debug("Saved game %s (key=%s)", item.id, item.key)
        return item

    async def count(self) -> int:
        with self._lock:
            return len(self._storage)

    def _put(self, item: CatalogItem) -> None:
        with self._lock:
            for existing in self._storage.values():
                if existing.key == item.key and existing.id != item.id:
                    raise ValueError(f"Game key '{item.key}' is already in use")
            self._storage[item.id] = item


class SqlCatalogStore(CatalogStore):
    """Catalog store backed by the relational database.

    SQLAlchemy sessions are synchronous, so every operation runs in a worker
    thread to keep the event loop free.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    async def fetch_all(self) -> list[CatalogItem]:
        return await asyncio.to_thread(self._fetch_all)

    async def fetch_by_key(self, key: str) -> CatalogItem | None:
        return await asyncio.to_thread(self._fetch_by_key, key)

    async def save(self, item: CatalogItem) -> CatalogItem:
        return await asyncio.to_thread(self._save, item)

    async def count(self) -> int:
        return await asyncio.to_thread(self._count)

    async def add_genre(
        self, genre_id: str, name: str, parent_genre_id: str | None = None
    ) -> None:
        """Register a genre that games can be linked to."""
        await asyncio.to_thread(
            self._merge,
            GenreRecord(id=genre_id, name=name, parent_genre_id=parent_genre_id),
        )

    async def add_platform(self, platform_id: str, platform_type: str) -> None:
        """Register a platform that games can be linked to."""
        await asyncio.to_thread(
            self._merge, PlatformRecord(id=platform_id, type=platform_type)
        )

    async def add_publisher(self, publisher_id: str, company_name: str) -> None:
        """Register a publisher that games can reference."""
        await asyncio.to_thread(
            self._merge, PublisherRecord(id=publisher_id, company_name=company_name)
        )

    def _fetch_all(self) -> list[CatalogItem]:
        with self._session_factory() as session:
            rows = session.scalars(select(GameRecord)).all()
            return [_to_catalog_item(row) for row in rows]

    def _count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(GameRecord)) or 0

    def _fetch_by_key(self, key: str) -> CatalogItem | None:
        with self._session_factory() as session:
            row = session.scalars(
                select(GameRecord).where(GameRecord.key == key)
            ).first()
            return _to_catalog_item(row) if row is not None else None

    def _save(self, item: CatalogItem) -> CatalogItem:
        with self._session_factory() as session, session.begin():
            row = session.get(GameRecord, item.id)
            if row is None:
                row = GameRecord(id=item.id)
                session.add(row)

            row.key = item.key
            row.name = item.name
            row.description = item.description
            row.price = item.price
            row.units_in_stock = item.units_in_stock
            row.discontinued = item.discontinued
            row.publisher_id = item.publisher_id
            row.view_count = item.view_count
            row.comment_count = item.comment_count
            row.created_at = item.created_at
            row.genres = _resolve_links(session, GenreRecord, item.genre_ids, item.key)
            row.platforms = _resolve_links(
                session, PlatformRecord, item.platform_ids, item.key
            )
            session.flush()
            stored = _to_catalog_item(row)

        logger.debug("Saved game %s (key=%s)", item.id, item.key)
        return stored

    def _merge(self, record) -> None:
        with self._session_factory() as session, session.begin():
            session.merge(record)


def _resolve_links(session: Session, model, ids: Iterable[str], game_key: str) -> list:
    records = []
    for record_id in sorted(ids):
        record = session.get(model, record_id)
        if record is None:
            logger.warning(
                "Skipping unknown %s '%s' for game %s",
                model.__tablename__,
                record_id,
                game_key,
            )
            continue
        records.append(record)
    return records


def _to_catalog_item(row: GameRecord) -> CatalogItem:
    return CatalogItem(
        id=row.id,
        key=row.key,
        name=row.name,
        description=row.description or "",
        price=Decimal(str(row.price or 0)),
        units_in_stock=row.units_in_stock or 0,
        discontinued=bool(row.discontinued),
        publisher_id=row.publisher_id,
        genre_ids=frozenset(genre.id for genre in row.genres),
        platform_ids=frozenset(platform.id for platform in row.platforms),
        view_count=row.view_count or 0,
        comment_count=row.comment_count or 0,
        created_at=row.created_at,
    )


_catalog_store: CatalogStore | None = None


def get_catalog_store() -> CatalogStore:
    """FastAPI dependency returning the process-wide catalog store."""

    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SqlCatalogStore(create_session_factory(get_catalog_engine()))
    return _catalog_store
