"""Dependency injection setup for the Axiom integration layer.

One ServiceContainer per process owns the shared CredentialStore and hands
the same instance to the REST client and the launch feed, so rotating
credentials reaches both.
"""

from typing import Optional

import structlog

from axiomtrack.config.settings import Settings, get_settings
from axiomtrack.services.axiom.client import AxiomClient
from axiomtrack.services.axiom.credentials import CredentialStore
from axiomtrack.services.axiom.feed import LaunchFeed

logger = structlog.get_logger(__name__)


class ServiceContainer:
    """Container for the process-wide Axiom services.

    Usage:
        container = ServiceContainer.get_instance()
        tokens = await container.client.get_trending()
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.credentials = CredentialStore.from_settings(self.settings)
        self.client = AxiomClient(self.credentials, self.settings)
        self.feed = LaunchFeed(self.credentials, self.settings)
        logger.info(
            "service_container_initialized",
            credentials_loaded=self.credentials.has_credentials(),
        )

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get or create the service container."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    async def aclose(self) -> None:
        """Stop the launch feed and release the HTTP client."""
        await self.feed.close()
        await self.client.close()
        logger.info("service_container_closed")

    @classmethod
    async def shutdown(cls) -> None:
        """Close and drop the singleton, if one was created."""
        if cls._instance is not None:
            await cls._instance.aclose()
            cls._instance = None

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None


def get_container() -> ServiceContainer:
    return ServiceContainer.get_instance()
