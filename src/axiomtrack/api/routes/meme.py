"""Meme token market data endpoints.

Responses never fail because the venue is unavailable; ``isLiveData`` is
false when no session credentials were configured for the request.
"""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from axiomtrack.api.dependencies import ContainerDep
from axiomtrack.constants.axiom import DEFAULT_LAUNCH_LIMIT, DEFAULT_TIMEFRAME, SOURCE_NAME
from axiomtrack.models.analysis import TokenAnalysis
from axiomtrack.models.token import LaunchEvent, TokenMetrics, TrendingMetrics
from axiomtrack.services.scoring import analyze_token, analyze_tokens

router = APIRouter(prefix="/meme", tags=["meme"])


class TrendingResponse(BaseModel):
    """Trending tokens with analyses of the leading entries."""

    model_config = ConfigDict(populate_by_name=True)

    tokens: list[TrendingMetrics]
    analyses: list[TokenAnalysis]
    is_live_data: bool = Field(alias="isLiveData")
    source: str = SOURCE_NAME


class LaunchesResponse(BaseModel):
    """Recently launched tokens."""

    model_config = ConfigDict(populate_by_name=True)

    launches: list[LaunchEvent]
    is_live_data: bool = Field(alias="isLiveData")
    source: str = SOURCE_NAME


class TokenResponse(BaseModel):
    """One token with its analysis."""

    token: TokenMetrics
    analysis: TokenAnalysis


@router.get("/trending", response_model=TrendingResponse)
async def get_trending(
    container: ContainerDep,
    timeframe: str = Query(default=DEFAULT_TIMEFRAME),
) -> TrendingResponse:
    """Trending tokens for a window; unknown windows are treated as 1h."""
    live = container.credentials.has_credentials()
    tokens = await container.client.get_trending(timeframe)
    return TrendingResponse(
        tokens=tokens,
        analyses=analyze_tokens(tokens),
        is_live_data=live,
    )


@router.get("/new-launches", response_model=LaunchesResponse)
async def get_new_launches(
    container: ContainerDep,
    limit: int = Query(default=DEFAULT_LAUNCH_LIMIT, ge=1, le=100),
) -> LaunchesResponse:
    """Most recent launches from the pulse endpoint."""
    live = container.credentials.has_credentials()
    launches = await container.client.get_new_launches(limit)
    return LaunchesResponse(launches=launches, is_live_data=live)


@router.get("/tokens/{mint}", response_model=TokenResponse)
async def get_token(mint: str, container: ContainerDep) -> TokenResponse:
    """Single token lookup with analysis."""
    token = await container.client.get_token_info(mint)
    if token is None:
        raise HTTPException(status_code=404, detail=f"Token {mint} not found")
    return TokenResponse(token=token, analysis=analyze_token(token))
