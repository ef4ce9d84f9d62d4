"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Credentials come from environment variables or .env (never hardcoded beyond local defaults)
    - get_settings() is cached (lru_cache), single instance per process

Design Decisions:
    - Defaults match the docker-compose database so the service starts out of the box
    - Pool recycle of 5 minutes bounds connection lifetime
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://explore:explore@db:5432/explore"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 25
    database_max_overflow: int = 10
    database_pool_recycle_seconds: int = 300
    create_schema_on_startup: bool = True

    # Requests
    request_timeout_seconds: float = 3.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
