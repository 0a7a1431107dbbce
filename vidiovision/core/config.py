"""
Application configuration models and helpers.

Centralizes settings management so both the FastAPI app and the command-line
analysis script share a consistent configuration surface.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
)


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access.

    The API key is handed to the SDK untouched. A missing or invalid key only
    shows up as a failed analysis call.
    """

    model_config = _ENV_FILE_CONFIG

    api_key: str = Field(
        "",
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    model_name: str = Field(
        "gemini-3-flash-preview",
        validation_alias=AliasChoices("GEMINI_MODEL_NAME"),
    )
    request_timeout: float = Field(
        120.0,
        gt=0,
        validation_alias=AliasChoices("GEMINI_REQUEST_TIMEOUT"),
        description="Seconds to wait for a single generate_content call.",
    )


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = _ENV_FILE_CONFIG

    environment: str = Field(
        "development", validation_alias=AliasChoices("APP_ENV")
    )
    log_level: str = Field("INFO", validation_alias=AliasChoices("APP_LOG_LEVEL"))
    history_limit: int = Field(
        10,
        ge=1,
        validation_alias=AliasChoices("HISTORY_LIMIT"),
        description="Number of past analyses kept in the session history.",
    )
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "GeminiSettings",
    "get_settings",
]
