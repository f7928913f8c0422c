"""Axiom REST client for trending tokens, token info and recent launches.

Every public method is non-raising: missing credentials, non-2xx statuses,
network errors, undecodable JSON and unusable body shapes are logged and
replaced by fallback data (``get_trending``, ``get_new_launches``) or by
``None`` (``get_token_info``).

Endpoints used:
    - GET {api_base}/axiom-trending?timePeriod={1h|6h|24h}
    - GET {api_base}/pair-info?pairAddress={mint}
    - GET {pulse_base}/pulse
"""

from __future__ import annotations

import random
from typing import Any

import structlog

from axiomtrack.config.settings import Settings, get_settings
from axiomtrack.constants.axiom import (
    DEFAULT_LAUNCH_LIMIT,
    DEFAULT_TIMEFRAME,
    PAIR_INFO_PATH,
    PULSE_PATH,
    TIMEFRAMES,
    TRENDING_PATH,
    USER_AGENT,
)
from axiomtrack.core.exceptions import AxiomTrackError, MalformedPayloadError
from axiomtrack.models.token import LaunchEvent, TokenMetrics, TrendingMetrics
from axiomtrack.services.axiom.credentials import CredentialStore
from axiomtrack.services.axiom.fallback import FallbackDataset
from axiomtrack.services.axiom.normalize import (
    LAUNCH_FIELDS,
    TOKEN_FIELDS,
    TRENDING_FIELDS,
    normalize,
)
from axiomtrack.services.base import BaseAPIClient

log = structlog.get_logger(__name__)


class AxiomClient(BaseAPIClient):
    """Authenticated Axiom REST client with graceful degradation.

    Session tokens are read from the shared CredentialStore on every request,
    so rotating them takes effect immediately.

    Example:
        client = AxiomClient(CredentialStore.from_settings(get_settings()))
        try:
            tokens = await client.get_trending("6h")
        finally:
            await client.close()
    """

    def __init__(
        self,
        credentials: CredentialStore,
        settings: Settings | None = None,
        fallback: FallbackDataset | None = None,
    ) -> None:
        settings = settings or get_settings()
        super().__init__(
            base_url=settings.axiom_api_base_url,
            timeout=settings.http_timeout,
            headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
            max_retries=settings.http_max_retries,
            circuit_breaker_threshold=settings.circuit_breaker_threshold,
            circuit_breaker_cooldown=settings.circuit_breaker_cooldown,
        )
        self._credentials = credentials
        self._pulse_base_url = settings.axiom_pulse_base_url
        if fallback is None:
            fallback = FallbackDataset(rng=random.Random(settings.fallback_seed))
        self._fallback = fallback
        log.info("axiom_client_initialized", base_url=self.base_url)

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    def circuit_states(self) -> dict[str, str]:
        """Breaker state of the REST host and the pulse host."""
        return {
            "api": self.circuit_state.value,
            "pulse": self.circuit_state_for(self._pulse_base_url).value,
        }

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET with the session cookie and decode the JSON body.

        Raises:
            CredentialsMissingError: If the token pair is incomplete.
            ExternalServiceError: On non-2xx or transport failure.
            CircuitBreakerOpenError: If the circuit is open.
            MalformedPayloadError: If the body is not JSON.
        """
        cookie = self._credentials.cookie_header()
        response = await self.get(url, params=params, headers={"Cookie": cookie})
        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayloadError(f"invalid JSON body: {e}", source=url) from e

    async def get_trending(self, timeframe: str = DEFAULT_TIMEFRAME) -> list[TrendingMetrics]:
        """Fetch trending tokens for a 1h/6h/24h window.

        Unknown timeframes fall back to 1h. ``rank`` is the 1-based position
        in the response as received.

        Returns:
            Live trending tokens, or the fallback set on any failure.
        """
        if not self._credentials.has_credentials():
            log.info("axiom_credentials_missing", operation="get_trending", fallback=True)
            return self._fallback.trending()

        time_period = timeframe if timeframe in TIMEFRAMES else DEFAULT_TIMEFRAME

        try:
            data = await self._get_json(TRENDING_PATH, params={"timePeriod": time_period})
            items = _extract_items(data, "get_trending")
        except AxiomTrackError as e:
            _log_soft_failure("get_trending", e)
            return self._fallback.trending()
        except Exception as e:
            log.exception("axiom_unexpected_error", operation="get_trending", error=str(e))
            return self._fallback.trending()

        tokens: list[TrendingMetrics] = []
        for rank, item in enumerate(items, start=1):
            try:
                tokens.append(TrendingMetrics(rank=rank, **normalize(item, TRENDING_FIELDS)))
            except MalformedPayloadError as e:
                log.warning("axiom_item_dropped", operation="get_trending", rank=rank, error=str(e))

        log.info("axiom_trending_fetched", timeframe=time_period, count=len(tokens))
        return tokens

    async def get_token_info(self, mint: str) -> TokenMetrics | None:
        """Fetch one token by mint.

        Returns:
            Normalized token, or None when credentials are missing or the
            lookup fails.
        """
        if not self._credentials.has_credentials():
            log.debug("axiom_credentials_missing", operation="get_token_info", mint=mint)
            return None

        try:
            data = await self._get_json(PAIR_INFO_PATH, params={"pairAddress": mint})
            token = TokenMetrics(**normalize(data, TOKEN_FIELDS, defaults={"mint": mint}))
        except AxiomTrackError as e:
            _log_soft_failure("get_token_info", e, mint=mint)
            return None
        except Exception as e:
            log.exception(
                "axiom_unexpected_error", operation="get_token_info", mint=mint, error=str(e)
            )
            return None

        log.debug("axiom_token_info_fetched", mint=mint)
        return token

    async def get_new_launches(self, limit: int = DEFAULT_LAUNCH_LIMIT) -> list[LaunchEvent]:
        """Fetch recently launched tokens from the pulse endpoint.

        Returns:
            Up to ``limit`` launches, or the fallback set on any failure.
        """
        if not self._credentials.has_credentials():
            log.info("axiom_credentials_missing", operation="get_new_launches", fallback=True)
            return self._fallback.new_launches()

        try:
            data = await self._get_json(f"{self._pulse_base_url}{PULSE_PATH}")
            items = _extract_items(data, "get_new_launches")
        except AxiomTrackError as e:
            _log_soft_failure("get_new_launches", e)
            return self._fallback.new_launches()
        except Exception as e:
            log.exception("axiom_unexpected_error", operation="get_new_launches", error=str(e))
            return self._fallback.new_launches()

        launches: list[LaunchEvent] = []
        for item in items[:limit]:
            try:
                launches.append(LaunchEvent(**normalize(item, LAUNCH_FIELDS)))
            except MalformedPayloadError as e:
                log.warning("axiom_item_dropped", operation="get_new_launches", error=str(e))

        log.info("axiom_launches_fetched", count=len(launches), limit=limit)
        return launches


def _extract_items(data: Any, operation: str) -> list[Any]:
    """Accept a bare list or an object wrapping it under ``tokens``."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("tokens"), list):
        return data["tokens"]
    raise MalformedPayloadError(
        f"expected list of tokens, got {type(data).__name__}", source=operation
    )


def _log_soft_failure(operation: str, error: AxiomTrackError, **context: Any) -> None:
    log.warning(
        "axiom_request_failed",
        operation=operation,
        error_type=type(error).__name__,
        status_code=getattr(error, "status_code", None),
        error=str(error),
        fallback=operation != "get_token_info",
        **context,
    )
