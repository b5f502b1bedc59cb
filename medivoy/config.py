"""Application configuration via pydantic-settings."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import List, Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Medivoy"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "medivoy"
    postgres_password: str = Field(default="medivoy_secret")
    postgres_db: str = "medivoy"
    db_pool_size: int = 20
    db_max_overflow: int = 10

    @computed_field
    @property
    def database_url(self) -> str:
        """Async PostgreSQL connection URL."""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Cost estimation (displayed range is independent of the exact estimate)
    cost_min_range: Decimal = Decimal("10000")
    cost_max_range: Decimal = Decimal("20000")
    tax_percent: Decimal = Decimal("10")
    max_addons_allowed: int = Field(default=20, ge=0)
    addon_price_multiplier: Decimal = Decimal("1.0")
    currency: str = "USD"

    # Lifecycle transitions
    transition_max_attempts: int = Field(default=3, ge=1)

    # Notifications
    urgent_notification_types: List[str] = ["emergency_alerts"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
