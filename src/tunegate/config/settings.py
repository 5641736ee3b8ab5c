"""Application settings loaded from environment variables / .env.

Hey future me - every group has its own env prefix so the .env stays readable:
CATALOG_TIMEOUT=10, LOG_LEVEL=DEBUG, API_PORT=9000 etc. Settings is cached by
get_settings() (one instance per process) - changes need a restart.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Upstream music catalog configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_", env_file=".env", extra="ignore"
    )

    base_url: str = Field(
        default="https://www.jiosaavn.com/api.php",
        description="Catalog endpoint that accepts the __call query parameter",
    )
    timeout: float = Field(
        default=15.0, gt=0, description="Per-request timeout in seconds"
    )
    max_connections: int = Field(default=50, ge=1)
    max_keepalive: int = Field(default=20, ge=0)
    http2: bool = True
    user_agent: str = "tunegate/0.1 (+https://github.com/tunegate/tunegate)"

    # Hey future me - max_pages is the runaway guard. A catalog reporting a huge total
    # with a tiny page size would otherwise have us fetch for minutes.
    max_pages: int = Field(default=200, ge=1)
    prefetch_concurrency: int = Field(
        default=1,
        ge=1,
        description="Pages fetched concurrently once page 1 is known (1 = sequential)",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_", env_file=".env", extra="ignore"
    )

    level: str = "INFO"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


class APISettings(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_", env_file=".env", extra="ignore"
    )

    host: str = "0.0.0.0"  # nosec B104 - container default
    port: int = Field(default=8000, ge=1, le=65535)
    docs_enabled: bool = True


class Settings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "tunegate"
    app_version: str = "0.1.0"
    debug: bool = False

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    api: APISettings = Field(default_factory=APISettings)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
