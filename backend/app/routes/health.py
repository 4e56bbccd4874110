"""
NoteShare Backend — Health Check Route
========================================

What:  GET /health for monitoring and load balancer probes.
How:   Runs SELECT 1 against the service's own database and reports uptime.
       The summarizer's upstream is not probed; a health check must not
       depend on, or spend quota at, a third party.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time
from typing import Callable

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import __version__
from app.database import Database
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

# Initialized once when the module loads
_start_time = time.time()


def create_health_router(service: str, get_db: Callable[[], Database]) -> APIRouter:
    """Build the /health router for one service, bound to its database dependency."""
    router = APIRouter(tags=["Health"])

    @router.get(
        "/health",
        response_model=HealthResponse,
        responses={503: {"description": "Database unreachable", "model": HealthResponse}},
        summary="Service health check",
        description="Returns service status, version, database connectivity and uptime.",
    )
    async def health_check(response: Response, db: Database = Depends(get_db)) -> HealthResponse:
        db_status = "connected"
        overall = "healthy"

        try:
            async with db.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            db_status = "disconnected"
            overall = "unhealthy"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            logger.warning("Health check: %s database unreachable: %s", service, str(e))

        return HealthResponse(
            status=overall,
            service=service,
            version=__version__,
            database=db_status,
            uptime_seconds=round(time.time() - _start_time, 2),
        )

    return router
