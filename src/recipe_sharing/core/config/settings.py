"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (local, test, development, production)
- Environment variable overrides using the ``__`` nested delimiter
- Type validation and coercion
- Caching for performance
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class AuthPolicy(StrEnum):
    """How protected routes treat a missing or unknown actor id.

    - STRICT: reject the request with 401
    - PERMISSIVE: continue the request anonymously
    """

    STRICT = "strict"
    PERMISSIVE = "permissive"


class StorageBackend(StrEnum):
    """Backing store for entity collections."""

    MEMORY = "memory"
    JSON = "json"
    JOURNAL = "journal"


class UpdateMode(StrEnum):
    """Schema applied to PUT payloads."""

    PARTIAL = "partial"
    FULL = "full"


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Sharing Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    prefix: str = ""
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []
    update_mode: UpdateMode = UpdateMode.PARTIAL


class AuthSettings(BaseModel):
    """Actor resolution settings.

    ``policy`` has no default; the service refuses to start until it is set.
    """

    policy: AuthPolicy | None = None
    user_id_header: str = "X-User-ID"
    body_field: str = "userId"


class StorageSettings(BaseModel):
    """Collection store settings."""

    backend: StorageBackend = StorageBackend.JSON
    data_dir: str = "data"
    compaction_threshold: int = Field(default=200, ge=1)


class RecipesSettings(BaseModel):
    """Recipe collection behavior."""

    cascade_favorites: bool = True


class CommentsSettings(BaseModel):
    """Comment collection behavior."""

    require_existing_recipe: bool = True


class PaginationSettings(BaseModel):
    """Defaults for the recipe filter endpoint."""

    default_limit: int = Field(default=10, ge=1)


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None
    slow_request_ms: float = Field(default=500.0, gt=0)


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Values passed to ``Settings()``
    2. Environment variables
    3. .env file
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Default values in code

    Nested values can be overridden with the ``__`` delimiter, for example
    ``STORAGE__BACKEND=memory`` or ``AUTH__POLICY=strict``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    storage: StorageSettings = StorageSettings()
    recipes: RecipesSettings = RecipesSettings()
    comments: CommentsSettings = CommentsSettings()
    pagination: PaginationSettings = PaginationSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below environment variables and .env."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
