"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from axiomtrack.config.settings import Settings, get_settings


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)  # type: ignore[call-arg]


class TestSettingsDefaults:
    """Tests for default configuration."""

    def test_axiom_defaults(self) -> None:
        settings = make_settings()

        assert settings.axiom_access_token is None
        assert settings.axiom_refresh_token is None
        assert settings.axiom_api_base_url == "https://axiom.trade/api"
        assert settings.axiom_pulse_base_url == "https://api5.axiom.trade"
        assert settings.axiom_ws_url == "wss://ws.axiom.trade"

    def test_resilience_defaults(self) -> None:
        """
        Given: No overrides
        When: Settings are created
        Then: One attempt per request, no timeout and a 5s reconnect delay
        """
        settings = make_settings()

        assert settings.http_timeout is None
        assert settings.http_max_retries == 1
        assert settings.ws_reconnect_delay_seconds == 5.0
        assert settings.ws_max_reconnect_attempts is None
        assert settings.fallback_seed is None


class TestSettingsEnvironment:
    """Tests for environment loading."""

    def test_tokens_loaded_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AXIOM_ACCESS_TOKEN", "env-access")
        monkeypatch.setenv("AXIOM_REFRESH_TOKEN", "env-refresh")

        settings = make_settings()

        assert settings.axiom_access_token is not None
        assert settings.axiom_access_token.get_secret_value() == "env-access"
        assert "env-access" not in repr(settings)

    def test_blank_token_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AXIOM_ACCESS_TOKEN", "  ")

        assert make_settings().axiom_access_token is None

    def test_numeric_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WS_RECONNECT_DELAY_SECONDS", "0.5")
        monkeypatch.setenv("WS_MAX_RECONNECT_ATTEMPTS", "10")
        monkeypatch.setenv("HTTP_TIMEOUT", "12.5")

        settings = make_settings()

        assert settings.ws_reconnect_delay_seconds == 0.5
        assert settings.ws_max_reconnect_attempts == 10
        assert settings.http_timeout == 12.5

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestSettingsValidation:
    """Tests for field validation."""

    def test_base_url_trailing_slash_stripped(self) -> None:
        settings = make_settings(axiom_api_base_url="https://axiom.example/api/")

        assert settings.axiom_api_base_url == "https://axiom.example/api"

    def test_base_url_requires_http_scheme(self) -> None:
        with pytest.raises(ValidationError):
            make_settings(axiom_pulse_base_url="ftp://pulse.example")

    def test_ws_url_requires_ws_scheme(self) -> None:
        with pytest.raises(ValidationError):
            make_settings(axiom_ws_url="https://ws.example")

    def test_negative_reconnect_delay_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_settings(ws_reconnect_delay_seconds=-1)

    def test_zero_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_settings(http_timeout=0)
