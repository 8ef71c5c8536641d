"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from tutorials import __version__
from tutorials.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status and database reachability."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        database = "unknown"
    else:
        database = "ok" if await gateway.ping() else "unavailable"

    return HealthResponse(
        status="ok",
        version=__version__,
        database=database,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
