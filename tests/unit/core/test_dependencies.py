"""Tests for the service container."""

import pytest

from axiomtrack.config.settings import Settings
from axiomtrack.core.dependencies import ServiceContainer, get_container
from axiomtrack.services.axiom.feed import FeedState


class TestServiceContainer:
    """Tests for ServiceContainer wiring and lifecycle."""

    def test_client_and_feed_share_credentials(self, axiom_settings: Settings) -> None:
        """
        Given: A container built from settings
        When: Credentials are rotated on the shared store
        Then: Both the REST client and the launch feed see them
        """
        container = ServiceContainer(axiom_settings)

        container.credentials.set_credentials("a", "r")

        assert container.client.credentials is container.credentials
        assert container.feed._credentials is container.credentials
        assert container.client.credentials.has_credentials() is True

    def test_credentials_seeded_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            axiom_access_token="env-a",
            axiom_refresh_token="env-r",
        )

        assert ServiceContainer(settings).credentials.has_credentials() is True

    def test_get_instance_is_singleton(self) -> None:
        assert ServiceContainer.get_instance() is get_container()

    def test_reset_drops_singleton(self) -> None:
        first = ServiceContainer.get_instance()

        ServiceContainer.reset()

        assert ServiceContainer.get_instance() is not first

    @pytest.mark.asyncio
    async def test_shutdown_closes_services(self, axiom_settings: Settings) -> None:
        container = ServiceContainer(axiom_settings)
        ServiceContainer._instance = container
        container.feed.subscribe(lambda event: None)

        await ServiceContainer.shutdown()

        assert ServiceContainer._instance is None
        assert container.feed.subscriber_count == 0
        assert container.feed.state == FeedState.DISCONNECTED
        assert container.client._client is None
