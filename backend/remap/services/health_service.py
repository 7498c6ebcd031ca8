"""
ReMap Backend: Health Service
===============================

What:  Builds the GET /health payload from a database liveness probe.
How:   Runs `probe_database()` (SELECT NOW(), version()) and wraps the result
       with environment name, timestamp and process uptime.
Who:   Called by the health route; the route decides between 200 and 503.

There is no retry or backoff: one failed probe means one 503 response.
"""

import logging
import time
from datetime import datetime, timezone

from remap import database
from remap.config import settings
from remap.schemas.health import DatabaseStatus, HealthResponse, UnhealthyResponse

logger = logging.getLogger(__name__)

# Process start reference for uptime reporting
_start_time = time.monotonic()


def uptime_seconds() -> float:
    """Seconds since this module (and so the server process) was loaded."""
    return time.monotonic() - _start_time


class HealthService:
    """Stateless; one shared instance below."""

    async def check(self) -> HealthResponse:
        """
        Probe the database and report a healthy status.

        Raises:
            DatabaseError: the probe failed; callers report "unhealthy".
        """
        probe = await database.probe_database()
        return HealthResponse(
            timestamp=datetime.now(timezone.utc),
            environment=settings.environment,
            database=DatabaseStatus(
                connected=True,
                current_time=probe.current_time,
                version=probe.version,
            ),
            uptime=uptime_seconds(),
        )

    def unhealthy(self, error: str = "Database connection failed") -> UnhealthyResponse:
        return UnhealthyResponse(
            timestamp=datetime.now(timezone.utc),
            error=error,
            uptime=uptime_seconds(),
        )


health_service = HealthService()
