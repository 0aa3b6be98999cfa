"""Domain exceptions raised by the catalog services."""

from __future__ import annotations


class CatalogNotFoundError(LookupError):
    """Base class for lookups that found nothing."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key


class GameNotFoundError(CatalogNotFoundError):
    """No game with the requested key exists in the catalog."""

    def __str__(self) -> str:
        return f"Game with key '{self.key}' not found"


class ProductNotFoundError(CatalogNotFoundError):
    """No product with the requested key exists in either catalog."""

    def __str__(self) -> str:
        return f"Product with key '{self.key}' not found"
