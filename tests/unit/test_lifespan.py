"""Tests for FastAPI lifespan management."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from axiomtrack.api.app import create_app
from axiomtrack.core.dependencies import ServiceContainer


class TestLifespan:
    """Tests for application lifespan management."""

    def test_lifespan_creates_container_on_startup(self) -> None:
        """
        Given: No service container exists
        When: The application starts
        Then: The process container is created
        """
        assert ServiceContainer._instance is None

        with TestClient(create_app()):
            assert ServiceContainer._instance is not None

    def test_lifespan_shuts_down_container(self, axiom_settings) -> None:
        """
        Given: A running application
        When: It stops
        Then: The container is closed and dropped
        """
        container = ServiceContainer(axiom_settings)
        ServiceContainer._instance = container

        with (
            patch.object(container.feed, "close", new_callable=AsyncMock) as feed_close,
            patch.object(container.client, "close", new_callable=AsyncMock) as client_close,
        ):
            with TestClient(create_app()):
                pass

        feed_close.assert_awaited_once()
        client_close.assert_awaited_once()
        assert ServiceContainer._instance is None

    def test_shutdown_error_does_not_propagate(self, axiom_settings) -> None:
        container = ServiceContainer(axiom_settings)
        ServiceContainer._instance = container

        with patch.object(
            container.feed, "close", new_callable=AsyncMock, side_effect=RuntimeError("boom")
        ):
            with TestClient(create_app()):
                pass
