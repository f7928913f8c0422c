"""Base API client with per-host circuit breakers and retry logic.

This module provides:
- CircuitState enum for circuit breaker states
- CircuitBreaker dataclass tracking consecutive transport failures of one host
- BaseAPIClient class for making resilient HTTP requests

A client may talk to more than one host (relative paths go to ``base_url``,
absolute URLs go wherever they point). Each host gets its own breaker, so an
outage on one host never blocks requests to another.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

import httpx
import structlog

from axiomtrack.core.exceptions import CircuitBreakerOpenError, ExternalServiceError

log = structlog.get_logger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # requests flow
    OPEN = "open"  # requests blocked until cooldown elapses
    HALF_OPEN = "half_open"  # one trial request allowed


@dataclass
class CircuitBreaker:
    """Consecutive-failure breaker for a single upstream host.

    Opens after ``failure_threshold`` consecutive transport failures. Once
    ``cooldown_seconds`` have passed since the last failure, one trial request
    is let through; its outcome closes or reopens the circuit.

    Attributes:
        failure_threshold: Consecutive failures that open the circuit.
        cooldown_seconds: Seconds before a trial request is allowed.
        host: Host this breaker guards (used in log events only).
        failure_count: Current consecutive failure count.
        last_failure_time: Timestamp of the most recent failure.
        state: Current circuit state.
    """

    failure_threshold: int = 5
    cooldown_seconds: int = 30
    host: str = ""
    failure_count: int = field(default=0, init=False)
    last_failure_time: datetime | None = field(default=None, init=False)
    state: CircuitState = field(default=CircuitState.CLOSED, init=False)

    def record_success(self) -> None:
        if self.state != CircuitState.CLOSED:
            log.info("circuit_breaker_closed", host=self.host)
        self.failure_count = 0
        self.state = CircuitState.CLOSED

    def record_failure(self) -> None:
        """Count a failure; a failed trial request reopens immediately."""
        self.failure_count += 1
        self.last_failure_time = datetime.now(UTC)

        if self.state == CircuitState.HALF_OPEN:
            self.state = CircuitState.OPEN
            log.warning(
                "circuit_breaker_reopened", host=self.host, failure_count=self.failure_count
            )
        elif self.state == CircuitState.CLOSED and self.failure_count >= self.failure_threshold:
            self.state = CircuitState.OPEN
            log.warning(
                "circuit_breaker_opened",
                host=self.host,
                failure_count=self.failure_count,
                threshold=self.failure_threshold,
            )

    def can_execute(self) -> bool:
        """Whether a request may be sent now.

        An OPEN circuit moves to HALF_OPEN once the cooldown has elapsed.
        """
        if self.state != CircuitState.OPEN:
            return True
        if self.last_failure_time is None:
            return False

        elapsed = datetime.now(UTC) - self.last_failure_time
        if elapsed <= timedelta(seconds=self.cooldown_seconds):
            return False

        self.state = CircuitState.HALF_OPEN
        log.info(
            "circuit_breaker_half_open",
            host=self.host,
            cooldown_elapsed=elapsed.total_seconds(),
        )
        return True

    def raise_if_open(self) -> None:
        """
        Raises:
            CircuitBreakerOpenError: If the circuit is open and still cooling down.
        """
        if not self.can_execute():
            raise CircuitBreakerOpenError(
                f"Circuit breaker is open for {self.host or 'upstream'}. "
                f"Next retry in {self.seconds_until_trial():.1f} seconds."
            )

    def seconds_until_trial(self) -> float:
        if self.last_failure_time is None:
            return 0.0
        elapsed = datetime.now(UTC) - self.last_failure_time
        return max(0.0, self.cooldown_seconds - elapsed.total_seconds())


class BaseAPIClient:
    """HTTP client with bounded retries and one circuit breaker per host.

    - The httpx client is created lazily on first request.
    - 429, 5xx and transport errors are retried with exponential backoff.
    - Other 4xx responses fail at once and do not count against the breaker.
    - A ``timeout`` of None leaves requests unbounded.

    Example:
        client = BaseAPIClient(
            base_url="https://api.example.com",
            headers={"User-Agent": "example"},
        )
        response = await client.get("/endpoint")
        other = await client.get("https://cdn.example.net/feed")  # separate breaker
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = 30.0,
        headers: dict[str, str] | None = None,
        max_retries: int = 3,
        circuit_breaker_threshold: int = 5,
        circuit_breaker_cooldown: int = 30,
    ) -> None:
        """Initialize BaseAPIClient.

        Args:
            base_url: Base URL for relative request paths.
            timeout: Request timeout in seconds, None for no timeout.
            headers: Default headers for all requests.
            max_retries: Attempts per request (1 disables retries).
            circuit_breaker_threshold: Failures before a host's circuit opens.
            circuit_breaker_cooldown: Seconds before a trial request.
        """
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self.max_retries = max_retries
        self._client: httpx.AsyncClient | None = None
        self._breaker_threshold = circuit_breaker_threshold
        self._breaker_cooldown = circuit_breaker_cooldown
        self._breakers: dict[str, CircuitBreaker] = {}

    @property
    def circuit_state(self) -> CircuitState:
        """State of the breaker guarding ``base_url``'s host."""
        return self.circuit_state_for(self.base_url)

    def circuit_state_for(self, url: str) -> CircuitState:
        """State of the breaker guarding ``url``'s host (relative paths use base_url)."""
        return self._breaker_for(url).state

    def _host_of(self, url: str) -> str:
        parsed = httpx.URL(url)
        if parsed.is_relative_url:
            parsed = httpx.URL(self.base_url)
        return parsed.host

    def _breaker_for(self, url: str) -> CircuitBreaker:
        host = self._host_of(url)
        breaker = self._breakers.get(host)
        if breaker is None:
            breaker = CircuitBreaker(
                failure_threshold=self._breaker_threshold,
                cooldown_seconds=self._breaker_cooldown,
                host=host,
            )
            self._breakers[host] = breaker
        return breaker

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request through the target host's breaker, retrying transient failures.

        Args:
            method: HTTP method.
            path: Path relative to base_url, or an absolute URL.
            **kwargs: Passed through to ``httpx.AsyncClient.request``.

        Returns:
            Response with a 2xx status.

        Raises:
            CircuitBreakerOpenError: If the host's circuit is open.
            ExternalServiceError: On a non-retryable 4xx, or when every attempt failed.
        """
        breaker = self._breaker_for(path)
        breaker.raise_if_open()

        client = await self._get_client()
        last_error: Exception | None = None
        last_status: int | None = None

        for attempt in range(1, self.max_retries + 1):
            log.debug(
                "request_attempt",
                method=method,
                path=path,
                host=breaker.host,
                attempt=attempt,
                max_retries=self.max_retries,
            )
            try:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                if 400 <= status_code < 500 and status_code != 429:
                    log.warning(
                        "request_client_error", method=method, path=path, status_code=status_code
                    )
                    raise ExternalServiceError(
                        service=breaker.host, message=str(e), status_code=status_code
                    ) from e

                breaker.record_failure()
                last_error, last_status = e, status_code
                log.warning(
                    "request_server_error",
                    method=method,
                    path=path,
                    status_code=status_code,
                    attempt=attempt,
                )
            except httpx.RequestError as e:
                breaker.record_failure()
                last_error = e
                log.warning(
                    "request_connection_error",
                    method=method,
                    path=path,
                    error=str(e),
                    attempt=attempt,
                )
            else:
                breaker.record_success()
                return response

            if attempt < self.max_retries:
                backoff = min(2 ** (attempt - 1), 4)
                log.debug("request_retry_backoff", seconds=backoff)
                await asyncio.sleep(backoff)

        log.error(
            "request_attempts_exhausted",
            method=method,
            path=path,
            host=breaker.host,
            max_retries=self.max_retries,
        )
        raise ExternalServiceError(
            service=breaker.host,
            message=f"Request failed after {self.max_retries} attempt(s): {last_error}",
            status_code=last_status,
        )

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._request("GET", path, **kwargs)
