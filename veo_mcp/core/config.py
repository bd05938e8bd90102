"""Centralized server configuration."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from veo_mcp.models.errors import ConfigurationError


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VEO_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # Credential for the Gemini API (read without the VEO_ prefix)
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "VEO_GEMINI_API_KEY"),
    )

    # Upstream endpoint
    api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Timeout configuration (seconds)
    request_timeout: float = 60.0
    default_poll_interval: int = 10
    default_wait_timeout: int = 300

    # Maximum characters returned in a single tool response
    character_limit: int = 25000

    log_level: str = "INFO"

    def require_api_key(self) -> str:
        """Return the API key or raise if it is not configured."""
        if not self.gemini_api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY environment variable is required"
            )
        return self.gemini_api_key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
