"""Shared pytest fixtures for AxiomTrack tests.

This module provides fixtures for:
- A clean environment (no real Axiom credentials leak into tests)
- Settings and credential stores with or without session tokens

Usage:
    async def test_something(live_credentials, axiom_settings):
        client = AxiomClient(live_credentials, axiom_settings)
"""

import os
from collections.abc import Generator

import pytest

from axiomtrack.config.settings import Settings, get_settings
from axiomtrack.core.dependencies import ServiceContainer
from axiomtrack.services.axiom.credentials import CredentialStore

# =============================================================================
# Environment Configuration
# =============================================================================

_AXIOM_ENV_VARS = (
    "AXIOM_ACCESS_TOKEN",
    "AXIOM_REFRESH_TOKEN",
    "AXIOM_API_BASE_URL",
    "AXIOM_PULSE_BASE_URL",
    "AXIOM_WS_URL",
    "HTTP_TIMEOUT",
    "HTTP_MAX_RETRIES",
    "WS_RECONNECT_DELAY_SECONDS",
    "WS_MAX_RECONNECT_ATTEMPTS",
    "FALLBACK_SEED",
    "DEBUG",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment() -> Generator[None, None, None]:
    """Strip Axiom variables from the environment and reset singletons."""
    original_env = os.environ.copy()
    for name in _AXIOM_ENV_VARS:
        os.environ.pop(name, None)
    get_settings.cache_clear()
    ServiceContainer.reset()

    yield

    ServiceContainer.reset()
    get_settings.cache_clear()
    os.environ.clear()
    os.environ.update(original_env)


# =============================================================================
# Settings & Credentials
# =============================================================================


@pytest.fixture
def axiom_settings() -> Settings:
    """Settings with no .env file, fast reconnects and a fixed fallback seed."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        ws_reconnect_delay_seconds=0.0,
        fallback_seed=7,
    )


@pytest.fixture
def live_credentials() -> CredentialStore:
    """Credential store holding a complete token pair."""
    return CredentialStore(access_token="access-abc", refresh_token="refresh-xyz")


@pytest.fixture
def empty_credentials() -> CredentialStore:
    """Credential store with no tokens."""
    return CredentialStore()

