"""Health check endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()


def _uptime(request: Request) -> float:
    return round(time.monotonic() - request.app.state.started_at, 3)


@router.get("/health")
async def health_check(request: Request):
    """Basic health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": _uptime(request),
    }


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration info."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "service": "vyswap",
        "version": "0.1.0",
        "uptime": _uptime(request),
        "aggregator": request.app.state.aggregator_cell.state,
        "config": settings.get_safe_dict(),
    }
