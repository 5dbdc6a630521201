"""Health check endpoint."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from .models import HealthResponse

router = APIRouter()

_start_time = time.time()


def format_uptime(start_time: float) -> str:
    """Format uptime as human readable string."""
    uptime_seconds = int(time.time() - start_time)
    days = uptime_seconds // 86400
    hours = (uptime_seconds % 86400) // 3600
    minutes = (uptime_seconds % 3600) // 60
    seconds = uptime_seconds % 60

    return f"{days}d {hours}h {minutes}m {seconds}s"


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Returns service status, version, uptime, current timestamp and the size
    of the todo collection. Should always return 200 OK unless the service is
    shutting down.
    """
    from .. import __version__

    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime=format_uptime(_start_time),
        timestamp=datetime.now(timezone.utc),
        todo_count=len(request.app.state.store),
    )
