"""
Shared configuration management for the Storefront Access Client.
"""

from urllib.parse import urlparse

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


DEFAULT_API_BASE_URL = "https://api.example.com"

# Fixed transport settings; not environment driven.
REQUEST_TIMEOUT_SECONDS = 10.0
DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ClientConfig(BaseSettings):
    """Client configuration, immutable once built."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias="STOREFRONT_ENV")
    log_level: str = Field(default="info", validation_alias="STOREFRONT_LOG_LEVEL")

    # Upstream API
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        validation_alias=AliasChoices("STOREFRONT_API_BASE_URL", "NEXT_PUBLIC_API_BASE_URL"),
    )

    @field_validator("api_base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        value = value.strip() or DEFAULT_API_BASE_URL
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid API base URL: {value!r}")
        return value.rstrip("/")


def get_config(**overrides) -> ClientConfig:
    """Build configuration from the environment, applying explicit overrides."""
    try:
        return ClientConfig(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid client configuration",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc
