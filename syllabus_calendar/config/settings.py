"""Application settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the syllabus-calendar service.

    All settings can be overridden via environment variables.
    Extraction-specific settings live in ExtractionConfig (EXTRACTION_ prefix).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # Forces DEBUG logging regardless of log_level

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8001, ge=1, le=65535)
    api_keys: str | None = None  # Comma-separated; unset means dev mode
    cors_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Feature flags
    extraction_enabled: bool = True

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def accepted_api_keys(self) -> frozenset[str]:
        """Keys parsed from API_KEYS; empty means dev mode."""
        if not self.api_keys:
            return frozenset()
        return frozenset(k.strip() for k in self.api_keys.split(",") if k.strip())


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()
