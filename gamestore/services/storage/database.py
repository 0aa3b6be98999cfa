"""
Database models and engine configuration for the relational game catalog.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from gamestore.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


game_genres = Table(
    "game_genres",
    Base.metadata,
    Column("game_id", String(36), ForeignKey("games.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", String(36), ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)

game_platforms = Table(
    "game_platforms",
    Base.metadata,
    Column("game_id", String(36), ForeignKey("games.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "platform_id",
        String(36),
        ForeignKey("platforms.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class PublisherRecord(Base):
    """Company publishing one or more games."""
    __tablename__ = "publishers"

    id = Column(String(36), primary_key=True)
    company_name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, default="")
    home_page = Column(String(500), default="")

    games = relationship("GameRecord", back_populates="publisher")


class GenreRecord(Base):
    """Genre a game can be tagged with; genres may nest under a parent."""
    __tablename__ = "genres"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), unique=True, nullable=False)
    parent_genre_id = Column(String(36), ForeignKey("genres.id"), nullable=True)


class PlatformRecord(Base):
    """Platform a game runs on (e.g. 'Desktop', 'Console')."""
    __tablename__ = "platforms"

    id = Column(String(36), primary_key=True)
    type = Column(String(255), unique=True, nullable=False)


class GameRecord(Base):
    """Game row with its pricing, stock and listing counters."""
    __tablename__ = "games"

    id = Column(String(36), primary_key=True)
    key = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(500), nullable=False)
    description = Column(Text, default="")
    price = Column(Numeric(12, 2), nullable=False, default=0)
    units_in_stock = Column(Integer, nullable=False, default=0)
    discontinued = Column(Boolean, nullable=False, default=False)
    publisher_id = Column(String(36), ForeignKey("publishers.id"), nullable=True)
    view_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # Relationships
    publisher = relationship("PublisherRecord", back_populates="games")
    genres = relationship("GenreRecord", secondary=game_genres, lazy="selectin")
    platforms = relationship("PlatformRecord", secondary=game_platforms, lazy="selectin")


def create_catalog_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """Create the SQLAlchemy engine for the catalog database.

    SQLite connections are shared across the worker threads used by the
    async store, and in-memory databases are pinned to a single connection.
    """
    database_url = url or settings.DATABASE_URL
    options: dict = {"echo": settings.DATABASE_ECHO if echo is None else echo}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            options["poolclass"] = StaticPool
    return create_engine(database_url, **options)


_engine: Engine | None = None


def get_catalog_engine() -> Engine:
    """Return a singleton engine for the current process."""

    global _engine
    if _engine is None:
        _engine = create_catalog_engine()
    return _engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_database(engine: Engine) -> None:
    """Create every catalog table that does not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info("Catalog schema ready on %s", engine.url.render_as_string(hide_password=True))
