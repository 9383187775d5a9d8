"""
Portfolio API - Status Routes
=============================

What:  Liveness text at GET / and a dependency-aware check at GET /health.

Status levels for /health:
    - healthy:   database answers a ping (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from portfolio_api import __version__
from portfolio_api.config import settings
from portfolio_api.database import Database, get_database
from portfolio_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Server status text")
async def root(db: Database = Depends(get_database)) -> PlainTextResponse:
    """Plain-text banner; falls back to an error string when no database handle is open."""
    if not db.is_connected:
        return PlainTextResponse("Server is not working", status_code=503)
    return PlainTextResponse(f"Portfolio server is running on {settings.port}")


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(db: Database = Depends(get_database)):
    """Pings MongoDB and reports the result with the service uptime."""
    if await db.ping():
        db_status, overall, status_code = "connected", "healthy", 200
    else:
        db_status, overall, status_code = "disconnected", "unhealthy", 503
        logger.warning("Health check: database unreachable")

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())
