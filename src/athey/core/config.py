"""Configuration settings for the chat service."""

import json
from functools import lru_cache
from typing import Annotated, Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from athey.schemas.providers import ProviderKey

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service identification
    service_name: str = "athey-chat"
    debug: bool = False

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8001

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_request_headers: bool = False
    log_request_body: bool = False

    # Provider credentials
    n2yo_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ATHEY_N2YO_API_KEY", "N2YO_API_KEY"),
    )
    nasa_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ATHEY_NASA_API_KEY", "NASA_API_KEY"),
    )

    # Generation engine (OpenAI-compatible chat completions)
    model_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ATHEY_MODEL_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY"
        ),
    )
    model_base_url: str = GEMINI_OPENAI_BASE_URL
    model_name: str = "gemini-2.5-flash"

    # Timeouts (seconds)
    provider_timeout: float = 8.0
    generation_timeout: float = 120.0
    request_timeout: float = 120.0

    # Context aggregation
    context_providers: Annotated[list[ProviderKey], NoDecode] = [
        ProviderKey.ISS_POSITION,
        ProviderKey.LATEST_LAUNCH,
        ProviderKey.UPCOMING_LAUNCHES,
        ProviderKey.APOD,
    ]
    upcoming_launch_limit: int = 3
    past_launch_limit: int = 10

    # Satellite queries use a fixed observer
    iss_norad_id: int = 25544
    observer_latitude: float = 0.0
    observer_longitude: float = 0.0
    observer_altitude: float = 0.0
    above_latitude: float = 28.6139
    above_longitude: float = 77.209
    above_radius: int = 70
    above_category: int = 0

    # CORS configuration
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_prefix="ATHEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )

    @field_validator("context_providers", mode="before")
    @classmethod
    def _split_provider_list(cls, value: Any) -> Any:
        """Accept a JSON array or a comma-separated list of provider keys."""
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [item.strip() for item in value.split(",") if item.strip()]

    def missing_credentials(self) -> list[str]:
        """Names of credentials that are not configured."""
        missing = []
        if not self.n2yo_api_key:
            missing.append("n2yo_api_key")
        if not self.nasa_api_key:
            missing.append("nasa_api_key")
        if not self.model_api_key:
            missing.append("model_api_key")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
