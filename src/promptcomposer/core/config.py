"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class GenerationDefaults(BaseSettings):
    """Defaults for settings a system prompt config leaves out."""

    max_generation_time: int = Field(5000, alias="PC_MAX_GENERATION_TIME")
    fail_on_provider_error: bool = Field(False, alias="PC_FAIL_ON_PROVIDER_ERROR")
    content_separator: str = Field("\n\n", alias="PC_CONTENT_SEPARATOR")

    model_config = {"env_prefix": "", "extra": "ignore"}


class WatchSettings(BaseSettings):
    """File watching configuration for file-based providers."""

    poll_interval: int = Field(1000, alias="PC_WATCH_POLL_INTERVAL")  # milliseconds
    default_encoding: str = Field("utf-8", alias="PC_DEFAULT_ENCODING")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LegacySettings(BaseSettings):
    """Legacy single-string prompt configuration."""

    separator: str = Field("\n\n", alias="PC_LEGACY_SEPARATOR")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", alias="PC_LOG_LEVEL")
    format: str = Field("text", alias="PC_LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Root configuration aggregating all settings."""

    generation: GenerationDefaults = Field(default_factory=GenerationDefaults)
    watch: WatchSettings = Field(default_factory=WatchSettings)
    legacy: LegacySettings = Field(default_factory=LegacySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_file": ".env",
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
