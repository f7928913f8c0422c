"""Tests for BaseAPIClient retry, circuit breaker and lifecycle."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from axiomtrack.core.exceptions import CircuitBreakerOpenError, ExternalServiceError
from axiomtrack.services.base import BaseAPIClient, CircuitState

BASE_URL = "https://api.example.com"


def make_response(status_code: int) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                f"HTTP {status_code}", request=MagicMock(), response=response
            )
        )
    else:
        response.raise_for_status = MagicMock()
    return response


def client_with(*outcomes, **kwargs) -> tuple[BaseAPIClient, AsyncMock]:
    """BaseAPIClient whose httpx client yields ``outcomes`` in order."""
    client = BaseAPIClient(base_url=BASE_URL, **kwargs)
    mock_httpx_client = AsyncMock()
    mock_httpx_client.request = AsyncMock(side_effect=list(outcomes))
    client._client = mock_httpx_client
    return client, mock_httpx_client


class TestBaseAPIClientInit:
    """Tests for BaseAPIClient construction."""

    def test_defaults(self) -> None:
        client = BaseAPIClient(base_url=BASE_URL)

        assert client.base_url == BASE_URL
        assert client.timeout == 30.0
        assert client.headers == {}
        assert client.max_retries == 3
        assert client.circuit_state == CircuitState.CLOSED
        assert client._client is None

    def test_timeout_can_be_disabled(self) -> None:
        assert BaseAPIClient(base_url=BASE_URL, timeout=None).timeout is None

    @pytest.mark.asyncio
    async def test_lazy_client_reused(self) -> None:
        client = BaseAPIClient(base_url=BASE_URL, headers={"User-Agent": "test"})

        first = await client._get_client()
        second = await client._get_client()

        assert first is second
        assert first.headers["User-Agent"] == "test"
        await client.close()

    @pytest.mark.asyncio
    async def test_close_releases_client(self) -> None:
        """
        Given: BaseAPIClient with an active httpx client
        When: close() is called
        Then: The client is closed and dropped
        """
        client, mock_httpx_client = client_with()

        await client.close()
        await client.close()

        mock_httpx_client.aclose.assert_called_once()
        assert client._client is None


class TestBaseAPIClientRetry:
    """Tests for retry behavior."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self) -> None:
        client, mock_httpx_client = client_with(make_response(200))

        response = await client.get("/endpoint", params={"a": "1"})

        assert response.status_code == 200
        mock_httpx_client.request.assert_called_once_with("GET", "/endpoint", params={"a": "1"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401, 403, 404])
    async def test_client_errors_are_not_retried(self, status_code: int) -> None:
        """
        Given: A request that returns a 4xx other than 429
        When: get() is called
        Then: ExternalServiceError is raised after one attempt
        """
        client, mock_httpx_client = client_with(make_response(status_code))

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.get("/endpoint")

        assert exc_info.value.status_code == status_code
        assert mock_httpx_client.request.call_count == 1
        assert client._breaker_for("/endpoint").failure_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [429, 500, 502, 503])
    async def test_retryable_status_then_success(self, status_code: int) -> None:
        client, mock_httpx_client = client_with(make_response(status_code), make_response(200))

        with patch("asyncio.sleep", new_callable=AsyncMock):
            response = await client.get("/endpoint")

        assert response.status_code == 200
        assert mock_httpx_client.request.call_count == 2

    @pytest.mark.asyncio
    async def test_transport_error_then_success(self) -> None:
        client, mock_httpx_client = client_with(
            httpx.TimeoutException("timeout"), make_response(200)
        )

        with patch("asyncio.sleep", new_callable=AsyncMock):
            response = await client.get("/endpoint")

        assert response.status_code == 200
        assert client.circuit_state == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_with_last_status(self) -> None:
        """
        Given: Every attempt returns 503
        When: get() is called with max_retries=3
        Then: ExternalServiceError carries 503 and backoff grows 1s, 2s
        """
        client, mock_httpx_client = client_with(
            make_response(503), make_response(503), make_response(503)
        )

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(ExternalServiceError) as exc_info:
                await client.get("/endpoint")

        assert exc_info.value.status_code == 503
        assert mock_httpx_client.request.call_count == 3
        assert [call.args[0] for call in mock_sleep.call_args_list] == [1, 2]

    @pytest.mark.asyncio
    async def test_single_attempt_does_not_sleep(self) -> None:
        client, mock_httpx_client = client_with(
            httpx.ConnectError("refused"), max_retries=1
        )

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(ExternalServiceError) as exc_info:
                await client.get("/endpoint")

        assert exc_info.value.status_code is None
        assert mock_httpx_client.request.call_count == 1
        mock_sleep.assert_not_called()


class TestBaseAPIClientCircuitBreaker:
    """Tests for circuit breaker integration."""

    @pytest.mark.asyncio
    async def test_open_circuit_blocks_requests(self) -> None:
        client, mock_httpx_client = client_with(
            make_response(500),
            make_response(500),
            max_retries=1,
            circuit_breaker_threshold=2,
        )

        for _ in range(2):
            with pytest.raises(ExternalServiceError):
                await client.get("/endpoint")

        assert client.circuit_state == CircuitState.OPEN
        with pytest.raises(CircuitBreakerOpenError):
            await client.get("/endpoint")
        assert mock_httpx_client.request.call_count == 2

    @pytest.mark.asyncio
    async def test_breakers_are_per_host(self) -> None:
        """
        Given: The base host's circuit has opened
        When: A request goes to an absolute URL on another host
        Then: It is still sent and that host's circuit stays closed
        """
        client, mock_httpx_client = client_with(
            make_response(500),
            make_response(200),
            max_retries=1,
            circuit_breaker_threshold=1,
        )

        with pytest.raises(ExternalServiceError):
            await client.get("/endpoint")

        response = await client.get("https://other.example.org/feed")

        assert response.status_code == 200
        assert client.circuit_state == CircuitState.OPEN
        assert client.circuit_state_for("https://other.example.org/x") == CircuitState.CLOSED
        assert mock_httpx_client.request.call_count == 2

    @pytest.mark.asyncio
    async def test_exhausted_error_names_host(self) -> None:
        client, _ = client_with(make_response(502), max_retries=1)

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.get("/endpoint")

        assert exc_info.value.service == "api.example.com"
