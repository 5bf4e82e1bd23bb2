"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "GymDirectory"
    app_env: str = "development"  # development, staging, production
    debug: bool = True
    log_level: str = "INFO"

    # Database
    database_url: str = "postgresql://localhost:5432/gymdirectory"

    # JWT Authentication (tokens are issued by an external identity provider)
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None
    jwt_issuer: Optional[str] = None
    jwt_access_token_expire_minutes: int = 60 * 24  # 1 day, dev tokens only

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Photo storage
    storage_location: str = "uploads"

    # Reviews
    review_edit_window_hours: int = 24
    review_min_rating: int = 1
    review_max_rating: int = 5

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    # Random geo locator bounding box (Hamburg)
    geo_min_lat: float = 53.4
    geo_max_lat: float = 53.7
    geo_min_lon: float = 9.7
    geo_max_lon: float = 10.3

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
