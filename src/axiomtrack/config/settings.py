"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """AxiomTrack configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    app_name: str = Field(default="AxiomTrack", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum log level"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Axiom session credentials (both or neither)
    axiom_access_token: SecretStr | None = Field(
        default=None, description="Axiom auth-access-token cookie value"
    )
    axiom_refresh_token: SecretStr | None = Field(
        default=None, description="Axiom auth-refresh-token cookie value"
    )

    # Axiom endpoints
    axiom_api_base_url: str = Field(
        default="https://axiom.trade/api", description="Axiom REST base URL"
    )
    axiom_pulse_base_url: str = Field(
        default="https://api5.axiom.trade", description="Axiom pulse (launches) base URL"
    )
    axiom_ws_url: str = Field(default="wss://ws.axiom.trade", description="Axiom push channel")

    # HTTP client
    http_timeout: float | None = Field(
        default=None, gt=0, description="Request timeout in seconds (None disables)"
    )
    http_max_retries: int = Field(default=1, ge=1, le=5, description="Attempts per request")

    # Circuit Breaker
    circuit_breaker_threshold: int = Field(
        default=5, ge=1, description="Failures before circuit opens"
    )
    circuit_breaker_cooldown: int = Field(
        default=30, ge=1, description="Seconds before half-open"
    )

    # Realtime feed
    ws_reconnect_delay_seconds: float = Field(
        default=5.0, ge=0.0, description="Fixed delay before reconnecting the launch feed"
    )
    ws_max_reconnect_attempts: int | None = Field(
        default=None, ge=1, description="Reconnect ceiling (None retries forever)"
    )

    # Fallback dataset
    fallback_seed: int | None = Field(
        default=None, description="Seed for fallback identifiers (None is non-deterministic)"
    )

    @field_validator("axiom_access_token", "axiom_refresh_token", mode="before")
    @classmethod
    def blank_token_is_missing(cls, v: object) -> object:
        """Treat empty token strings as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("axiom_api_base_url", "axiom_pulse_base_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate REST base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Axiom base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("axiom_ws_url")
    @classmethod
    def validate_ws_url(cls, v: str) -> str:
        """Validate WebSocket URL format."""
        if not v.startswith(("ws://", "wss://")):
            raise ValueError("Axiom WebSocket URL must start with ws:// or wss://")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
