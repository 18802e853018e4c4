"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - resolved_database_url() always returns an async-driver URL

Design Decisions:
    - DATABASE_URL wins over the discrete PG* fields when both are set
    - Pool sizing is passed through untouched (not tuned here)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

_ASYNC_SCHEME = "postgresql+asyncpg://"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str | None = None
    pghost: str = "localhost"
    pguser: str = "postgres"
    pgpassword: str | None = None
    pgdatabase: str = "postgres"
    pgport: int = 5432
    database_ssl: bool = False
    database_pool_size: int = 10
    database_max_overflow: int = 5

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosted providers hand out postgres:// URLs; asyncpg needs postgresql+asyncpg://."""
        if not isinstance(v, str) or not v.strip():
            return None
        v = v.strip()
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return _ASYNC_SCHEME + v[len(prefix):]
        return v

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    trust_proxy: bool = False
    static_dir: str = "../frontend"

    # API
    cors_origins: list[str] = [
        "http://localhost:4000",
        "http://localhost:5173",
    ]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def resolved_database_url(self) -> str:
        """Connection string for the engine, assembled from PG* fields if needed."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.pguser,
            password=self.pgpassword,
            host=self.pghost,
            port=self.pgport,
            database=self.pgdatabase,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
