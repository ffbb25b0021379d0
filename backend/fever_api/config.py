"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - registered_api_key() is the only place the Fever key is derived from settings

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: SQLite works out-of-the-box for a single reader
    - fever_email + fever_password derive the key the way Fever clients compute it,
      so users can configure credentials instead of a precomputed hash
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fever_api.core.authenticate import derive_api_key


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///fever.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Fever account (single implicit reader)
    fever_api_key: str | None = None
    fever_email: str | None = None
    fever_password: str | None = None
    fever_api_version: int = 3

    # API
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def registered_api_key(self) -> str | None:
        """Configured Fever key, explicit key first, then derived from credentials."""
        if self.fever_api_key:
            return self.fever_api_key
        if self.fever_email and self.fever_password:
            return derive_api_key(self.fever_email, self.fever_password)
        return None


@lru_cache
def get_settings() -> Settings:
    return Settings()
