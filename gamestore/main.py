"""FastAPI application entry point."""

from gamestore.application import create_app

app = create_app()

__all__ = ["app"]
