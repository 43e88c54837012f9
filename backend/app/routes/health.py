"""
Quillnote Backend - Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Probes the database with SELECT 1 and reports, per provider, whether
       its API key is configured. Providers are not called: a probe must
       not spend API quota.

    Status levels:
    - healthy:   database reachable and at least one provider configured
    - degraded:  database reachable, no provider configured
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from app import __version__
from app.schemas.note import HealthResponse
from app.services.summary_service import summary_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        from app.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    providers = {
        name: "configured" if provider.is_configured() else "not_configured"
        for name, provider in summary_service.providers.items()
    }
    if overall == "healthy" and "configured" not in providers.values():
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        providers=providers,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
