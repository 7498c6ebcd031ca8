"""
ReMap Backend: Database Access
================================

What:  Async SQLAlchemy engine plus the handful of queries the API runs.
How:   One pooled engine per process; each probe borrows a connection with
       `engine.connect()` and returns it to the pool when done.
Who:   Used by HealthService, MemoryService and the lifespan handler.
When:  Engine is created at module import; connections are checked out per call.

ReMap stores no application data yet, so there is no ORM base, no session
dependency and no migration tree. The database is only asked what time it
is and which version it runs.

Connection Pooling:
    pool_size / max_overflow:  from settings (defaults 10 / 5)
    pool_pre_ping:             validates connections before use
    pool_recycle=3600:         recycles connections every hour
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from remap.config import settings
from remap.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
# create_async_engine does not connect; the first query opens the pool
engine: AsyncEngine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,
    echo=settings.log_level == "DEBUG",
)

PROBE_QUERY = text("SELECT NOW() AS current_time, version() AS postgres_version")
SERVER_TIME_QUERY = text("SELECT NOW() AS timestamp")


@dataclass(frozen=True)
class DatabaseProbe:
    """Result of a successful liveness probe."""

    current_time: datetime
    version: str


def postgres_version_label(raw: str) -> str:
    """
    Shorten `version()` output to product and release.

    "PostgreSQL 17.2 on x86_64-pc-linux-musl, compiled by gcc ..." -> "PostgreSQL 17.2"
    """
    parts = raw.split()
    return " ".join(parts[:2]) if parts else ""


async def probe_database() -> DatabaseProbe:
    """
    Run the liveness query used by GET /health.

    Returns:
        DatabaseProbe with the database server time and short version label.

    Raises:
        DatabaseError: connection could not be opened or the query failed.
    """
    try:
        async with engine.connect() as conn:
            result = await conn.execute(PROBE_QUERY)
            row = result.mappings().one()
    except Exception as e:
        logger.warning("Database probe failed: %s", str(e))
        raise DatabaseError(
            message="Database connection failed",
            context={"original_error": type(e).__name__, "detail": str(e)},
        ) from e

    return DatabaseProbe(
        current_time=row["current_time"],
        version=postgres_version_label(row["postgres_version"]),
    )


async def fetch_server_time() -> datetime:
    """
    Ask the database for its current time.

    Raises:
        DatabaseError: with the message "Database query failed".
    """
    try:
        async with engine.connect() as conn:
            result = await conn.execute(SERVER_TIME_QUERY)
            return result.scalar_one()
    except Exception as e:
        logger.error("Database query failed: %s", str(e))
        raise DatabaseError(
            message="Database query failed",
            context={"original_error": type(e).__name__, "detail": str(e)},
        ) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def check_connection() -> bool:
    """
    Startup connectivity check.

    What:  Opens one connection and logs where we connected to.
    How:   Never raises; a database that is down at startup is reported in the
           log and the server keeps running so /health can report it.
    """
    info = settings.safe_database_info()
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Failed to connect to PostgreSQL database: %s", str(e))
        logger.error("Database configuration: %s", info)
        return False

    logger.info(
        "Successfully connected to PostgreSQL database %s on %s:%s",
        info["database"],
        info["host"],
        info["port"],
    )
    return True


async def dispose_engine() -> None:
    """Close all pooled connections (application shutdown)."""
    await engine.dispose()
