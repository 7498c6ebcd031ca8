"""
ReMap Backend: Health Check Route
===================================

What:  Health check endpoint for Docker health checks and the mobile app's
       health tab.
How:   Delegates to HealthService; a DatabaseError becomes HTTP 503 with an
       "unhealthy" body instead of going through the global 500 handler.
Who:   Docker HEALTHCHECK (curl -f), compose healthcheck, remap.monitor.
When:  Every 30 seconds from Docker; on demand from the app.

Status levels:
    - healthy:   database answered SELECT NOW() (HTTP 200)
    - unhealthy: database unreachable or query failed (HTTP 503)
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from remap.exceptions import DatabaseError
from remap.schemas.health import HealthResponse, UnhealthyResponse
from remap.services.health_service import health_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.head("/health", include_in_schema=False)
@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Database reachable", "model": HealthResponse},
        503: {"description": "Database unreachable", "model": UnhealthyResponse},
    },
    summary="Service health check",
    description=(
        "Runs a database liveness query and reports server status, environment, "
        "database time and version, and process uptime."
    ),
)
async def health_check():
    try:
        return await health_service.check()
    except DatabaseError as e:
        logger.error("Health check failed: %s | Context: %s", e.message, e.context)
        body = health_service.unhealthy(error=e.message)
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
