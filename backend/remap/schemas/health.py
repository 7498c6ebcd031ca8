"""
ReMap Backend: Health Schemas
===============================

What:  Pydantic models for GET /health and for the client-side health monitor.
Who:   The health route (server side) and remap.monitor (client side).

The server emits HealthResponse. The monitor reads the same body through
HealthReport, which accepts any status string so a degraded backend is
reported as a warning rather than a parse error.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class DatabaseStatus(BaseModel):
    """Database section of a healthy /health response."""
    connected: bool = Field(description="Whether the liveness query succeeded")
    current_time: datetime = Field(description="Database server time from SELECT NOW()")
    version: str = Field(description="Short PostgreSQL version label, e.g. 'PostgreSQL 17.2'")


class HealthResponse(BaseModel):
    """
    What:  Body of GET /health when the database answered (HTTP 200).

    Example:
        {
            "status": "healthy",
            "timestamp": "2025-06-01T10:00:00.000000+00:00",
            "environment": "development",
            "database": {"connected": true, "current_time": "...", "version": "PostgreSQL 17.2"},
            "uptime": 1234.5
        }
    """
    status: Literal["healthy"] = Field(default="healthy", description="Overall status")
    timestamp: datetime = Field(description="Server time when the check ran (UTC)")
    environment: str = Field(description="Value of NODE_ENV")
    database: DatabaseStatus
    uptime: float = Field(description="Seconds since the server process started")


class UnhealthyResponse(BaseModel):
    """Body of GET /health when the database probe failed (HTTP 503)."""
    status: Literal["unhealthy"] = Field(default="unhealthy")
    timestamp: datetime
    error: str = Field(default="Database connection failed")
    uptime: float


# ══════════════════════════════════════════════════════════════════════════
# Health monitor results (client side)
# ══════════════════════════════════════════════════════════════════════════


class DatabaseReport(BaseModel):
    """Database section of /health as the monitor reads it."""
    connected: bool = False
    version: str = "unknown"


class HealthReport(BaseModel):
    """
    What:  A /health body as seen by the monitor.
    How:   `status` and `database` are required; the rest falls back to
           placeholders. An `uptime` that is present but not a number is
           rejected.
    """
    status: str = Field(min_length=1)
    database: DatabaseReport
    environment: str = "unknown"
    timestamp: str = "unknown"
    uptime: float = 0


class HealthCheckStatus(str, Enum):
    """Outcome of a single monitor check."""
    CHECKING = "checking"
    HEALTHY = "healthy"
    WARNING = "warning"
    ERROR = "error"


class HealthCheckResult(BaseModel):
    """
    What:  One line of the health monitor report.
    How:   `details` is a newline-separated block of human-readable facts
           (uptime, database version, troubleshooting hints).
    """
    name: str
    status: HealthCheckStatus
    message: str
    details: Optional[str] = None
    last_checked: Optional[datetime] = None
