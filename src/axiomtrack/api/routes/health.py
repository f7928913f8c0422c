"""Health check endpoint with Axiom integration status."""

from typing import Any

from fastapi import APIRouter

from axiomtrack.api.dependencies import ContainerDep, SettingsDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: SettingsDep, container: ContainerDep) -> dict[str, Any]:
    """
    Health check endpoint.

    The service always reports ``ok``: without credentials the integration
    serves fallback data rather than failing.
    """
    return {
        "status": "ok",
        "version": settings.app_version,
        "axiom": {
            "credentials": container.credentials.has_credentials(),
            "feed": container.feed.state.value,
            "circuit": container.client.circuit_states(),
        },
    }
