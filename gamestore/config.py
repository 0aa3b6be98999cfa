"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Relational catalog
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./gamestore.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    # Redis / legacy product catalog
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    LEGACY_PRODUCTS_KEY: str = os.getenv("LEGACY_PRODUCTS_KEY", "legacy:products")

    # Catalog listing
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    TOTAL_GAMES_CACHE_SECONDS: float = float(os.getenv("TOTAL_GAMES_CACHE_SECONDS", "60"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"debug={self.debug}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
