"""Configuration management for dynatemplates.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Annotated, Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class EngineRegistryConfig(BaseModel):
    """Static configuration snapshot consumed by the engine registry.

    Attributes:
        template_engines: Enabled expansion engine keys.
        language_engines: Enabled language processor keys.
        template_options: Engine-specific options keyed by expansion engine key.
        language_options: Processor-specific options keyed by language key.
        filters: Custom filters registered in every expansion engine.
        global_values: Global values registered in every expansion engine.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    template_engines: tuple[str, ...] = ("njk",)
    language_engines: tuple[str, ...] = ("html", "mjml", "txt")
    template_options: dict[str, dict[str, Any]] = Field(default_factory=dict)
    language_options: dict[str, dict[str, Any]] = Field(default_factory=dict)
    filters: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    global_values: dict[str, Any] = Field(default_factory=dict)


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DYNATEMPLATES_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "dynatemplates"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/dynatemplates.db"
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Engine Settings
    enabled_template_engines: Annotated[list[str], NoDecode] = Field(default=["njk"])
    enabled_language_engines: Annotated[list[str], NoDecode] = Field(
        default=["html", "mjml", "txt"]
    )
    template_engine_options: dict[str, dict[str, Any]] = Field(default_factory=dict)
    language_engine_options: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @field_validator("enabled_template_engines", "enabled_language_engines", mode="before")
    @classmethod
    def parse_engine_keys(cls, v: str | list[str]) -> list[str]:
        """Parse engine keys from comma-separated string or list."""
        if isinstance(v, str):
            return [key.strip() for key in v.split(",") if key.strip()]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1."
            )
        return self

    def engine_registry_config(
        self,
        filters: dict[str, Callable[..., Any]] | None = None,
        global_values: dict[str, Any] | None = None,
    ) -> EngineRegistryConfig:
        """Build the engine registry snapshot from these settings.

        Filters and global values cannot come from the environment, so the
        caller supplies them here.

        Args:
            filters: Optional custom filters for every expansion engine.
            global_values: Optional global values for every expansion engine.

        Returns:
            EngineRegistryConfig: Immutable registry configuration.
        """
        return EngineRegistryConfig(
            template_engines=tuple(self.enabled_template_engines),
            language_engines=tuple(self.enabled_language_engines),
            template_options=dict(self.template_engine_options),
            language_options=dict(self.language_engine_options),
            filters=dict(filters or {}),
            global_values=dict(global_values or {}),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached for the lifetime of the application.
    To reload settings, clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
