"""Axiom session management endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from axiomtrack.api.dependencies import ContainerDep

router = APIRouter(prefix="/axiom", tags=["axiom"])


class CredentialsRequest(BaseModel):
    """New Axiom session token pair."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken", min_length=1)
    refresh_token: str = Field(alias="refreshToken", min_length=1)


class AxiomStatusResponse(BaseModel):
    """Current integration state."""

    model_config = ConfigDict(populate_by_name=True)

    connected: bool
    feed_state: str = Field(alias="feedState")
    subscribers: int


@router.get("/status", response_model=AxiomStatusResponse)
async def axiom_status(container: ContainerDep) -> AxiomStatusResponse:
    """Report whether live data is available and the launch feed state."""
    return AxiomStatusResponse(
        connected=container.credentials.has_credentials(),
        feed_state=container.feed.state.value,
        subscribers=container.feed.subscriber_count,
    )


@router.post("/credentials", status_code=status.HTTP_204_NO_CONTENT)
async def set_axiom_credentials(request: CredentialsRequest, container: ContainerDep) -> None:
    """Replace the session tokens used by the REST client and the launch feed."""
    container.credentials.set_credentials(request.access_token, request.refresh_token)
