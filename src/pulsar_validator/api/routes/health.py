"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from pulsar_validator import __version__
from pulsar_validator.api.dependencies import get_app_state
from pulsar_validator.api.app_state import AppState

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Basic health check for load balancers."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health/detailed")
async def health_detailed(
    state: AppState = Depends(get_app_state),
) -> dict[str, object]:
    """Detailed health check with component-level status."""
    challenge_count = len(state.catalog.challenge_ids())
    source = (
        str(state.settings.catalog_path)
        if state.settings.catalog_path
        else "built-in"
    )

    components = {
        "catalog": {
            "status": "loaded" if challenge_count else "empty",
            "challenges": challenge_count,
            "source": source,
        },
    }

    return {
        "status": "healthy" if challenge_count else "degraded",
        "version": __version__,
        "components": components,
        "timestamp": datetime.now(UTC).isoformat(),
    }
