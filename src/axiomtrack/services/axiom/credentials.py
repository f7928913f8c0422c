"""Axiom session credential store.

Holds the venue's access/refresh token pair for the process. Tokens are
seeded once from settings and replaced only through ``set_credentials``;
there is no expiry tracking and no refresh-token exchange.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from axiomtrack.config.settings import Settings
from axiomtrack.constants.axiom import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from axiomtrack.core.exceptions import CredentialsMissingError

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Immutable view of the session token pair."""

    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def complete(self) -> bool:
        return bool(self.access_token) and bool(self.refresh_token)


class CredentialStore:
    """Process-wide holder of the Axiom session tokens.

    Mutations are plain attribute writes with no suspension point, so on a
    single event loop no reader can observe a half-updated pair.
    """

    def __init__(self, access_token: str | None = None, refresh_token: str | None = None) -> None:
        self._access_token = access_token or None
        self._refresh_token = refresh_token or None

    @classmethod
    def from_settings(cls, settings: Settings) -> CredentialStore:
        """Seed the store from AXIOM_ACCESS_TOKEN / AXIOM_REFRESH_TOKEN."""
        access = settings.axiom_access_token
        refresh = settings.axiom_refresh_token
        store = cls(
            access_token=access.get_secret_value() if access else None,
            refresh_token=refresh.get_secret_value() if refresh else None,
        )
        if store.has_credentials():
            log.info("axiom_credentials_loaded", source="environment")
        return store

    def set_credentials(self, access_token: str, refresh_token: str) -> None:
        """Overwrite both tokens. No format validation is performed."""
        self._access_token = access_token or None
        self._refresh_token = refresh_token or None
        log.info("axiom_credentials_set", complete=self.has_credentials())

    def has_credentials(self) -> bool:
        """True iff both tokens are currently set."""
        return self._access_token is not None and self._refresh_token is not None

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def snapshot(self) -> Credentials:
        return Credentials(self._access_token, self._refresh_token)

    def cookie_header(self) -> str:
        """Build the composite session cookie.

        Raises:
            CredentialsMissingError: If either token is absent.
        """
        if not self.has_credentials():
            raise CredentialsMissingError("Axiom auth tokens not set")
        return (
            f"{ACCESS_TOKEN_COOKIE}={self._access_token}; "
            f"{REFRESH_TOKEN_COOKIE}={self._refresh_token}"
        )
