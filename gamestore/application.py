"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gamestore.api.routes import include_api_routes
from gamestore.config import settings
from gamestore.models.errors import ErrorResponse
from gamestore.services.storage.catalog_store import get_catalog_store
from gamestore.services.storage.database import get_catalog_engine, init_database
from gamestore.services.total_games import TOTAL_GAMES_HEADER, TotalGamesCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    init_database(get_catalog_engine())
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Gamestore Catalog",
        description="Game catalog browsing with filters, sorting and pagination",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    _configure_request_logging(app)
    _configure_total_games_header(app)
    _configure_error_handling(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TOTAL_GAMES_HEADER],
    )


def _configure_request_logging(app: FastAPI) -> None:
    """Log one line per HTTP request with its outcome and duration."""

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "HTTP %s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={
                "client": request.client.host if request.client else "unknown",
                "query": str(request.url.query),
            },
        )
        return response


def _configure_total_games_header(app: FastAPI) -> None:
    """Report the size of the whole catalog on every response."""

    cache = TotalGamesCache(settings.TOTAL_GAMES_CACHE_SECONDS)
    app.state.total_games_cache = cache

    @app.middleware("http")
    async def add_total_games_header(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        # Same store the routes resolve, overrides included
        store_factory = request.app.dependency_overrides.get(
            get_catalog_store, get_catalog_store
        )
        try:
            total = await cache.get(store_factory())
        except Exception:
            logger.warning("Could not count catalog games", exc_info=True)
            total = None

        response = await call_next(request)
        if total is not None:
            response.headers[TOTAL_GAMES_HEADER] = str(total)
        return response


def _configure_error_handling(app: FastAPI) -> None:
    """Turn unhandled exceptions into a 500 body carrying a correlation id."""

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        error = ErrorResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=None if settings.is_production else repr(exc),
        )
        logger.error(
            "Unhandled exception while processing %s %s (error_id=%s)",
            request.method,
            request.url.path,
            error.error_id,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=error.status_code,
            content=error.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
