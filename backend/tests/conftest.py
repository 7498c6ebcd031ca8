"""
ReMap Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── probe_result:      a successful DatabaseProbe
    ├── db_up / db_down:   patch remap.database so no real PostgreSQL is needed
    ├── test_client:       HTTPX AsyncClient talking to the app over ASGI
    └── lenient_client:    same, but returns 500s instead of re-raising app errors
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run BEFORE any remap import: settings are read once at import time
os.environ["NODE_ENV"] = "development"
os.environ["DB_HOST"] = "db.invalid"
os.environ["DB_PASSWORD"] = "test-password"
os.environ["LOG_LEVEL"] = "WARNING"

DB_TIME = datetime(2025, 6, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def probe_result():
    from remap.database import DatabaseProbe
    return DatabaseProbe(current_time=DB_TIME, version="PostgreSQL 17.2")


@pytest.fixture
def db_up(probe_result):
    """Database answers both the liveness probe and the clock query."""
    with patch("remap.database.probe_database", AsyncMock(return_value=probe_result)) as probe, \
         patch("remap.database.fetch_server_time", AsyncMock(return_value=DB_TIME)) as clock:
        yield probe, clock


@pytest.fixture
def db_down():
    """Every database call fails the way an unreachable server does."""
    from remap.exceptions import DatabaseError
    with patch(
        "remap.database.probe_database",
        AsyncMock(side_effect=DatabaseError(message="Database connection failed")),
    ) as probe, patch(
        "remap.database.fetch_server_time",
        AsyncMock(side_effect=DatabaseError(message="Database query failed")),
    ) as clock:
        yield probe, clock


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    ASGITransport does not run the lifespan, so no startup DB probe happens.
    """
    from remap.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def lenient_client():
    """Like test_client, for tests that trigger unhandled exceptions."""
    from remap.main import app
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
