"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - together_since is timezone-aware; its offset defines the calendar the timer counts in
"""

from datetime import datetime
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://keepsake:keepsake@db:5432/keepsake"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Together timer: September 3, 2025, 12:05 PM Vietnam time
    together_since: datetime = datetime.fromisoformat("2025-09-03T12:05:00+07:00")

    @field_validator("together_since")
    @classmethod
    def require_offset(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("together_since must include a UTC offset")
        return v

    # Calendar
    app_timezone: str = "Asia/Ho_Chi_Minh"
    recurrence_years_back: int | None = 20
    recurrence_years_forward: int = 1

    # List view
    default_page_size: int = 12

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
