"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

from pubdate.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check that the API is up and its sources are configured.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    from pubdate import __version__

    registry = getattr(request.app.state, "source_registry", None)
    return HealthResponse(
        status="healthy" if registry is not None else "degraded",
        version=__version__,
    )
