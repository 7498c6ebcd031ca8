"""
ReMap Backend: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (`uvicorn remap.main:app` or `python -m remap`).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────┐  │
    │  │  Req ID  │→│ Logging  │→│ Security │→│  CORS  │  │
    │  └──────────┘ └──────────┘ └──────────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────┐ ┌──────────┐ ┌───────────────────┐ │
    │  │ GET /health │ │ GET /api │ │ GET /api/memories │ │
    │  └─────────────┘ └──────────┘ └───────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ 404/405→404 │ DatabaseError→500 │ other→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (log problems, keep running)
    3. Probe database connectivity (log result, keep running)
    4. Log startup banner

    Shutdown:
    1. Dispose database engine (close all connections)
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from remap import __version__
from remap.config import settings
from remap.database import check_connection, dispose_engine
from remap.exceptions import ConfigurationError, DatabaseError, ReMapError
from remap.middleware.logging import RequestLoggingMiddleware
from remap.middleware.request_id import RequestIDMiddleware, request_id_var
from remap.middleware.security_headers import SECURITY_HEADERS, SecurityHeadersMiddleware
from remap.routes import api, health
from remap.routes.api import AVAILABLE_ENDPOINTS
from remap.schemas.errors import NotFoundResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    What:    Root logger writes to stdout (Docker captures it) with one format.
    When:    Called once during app startup, before any other initialization.

    Format: 2025-06-01T10:00:00 [INFO] remap.access: GET /api 200 1.2ms [...]
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    Neither a bad configuration nor an unreachable database stops the server:
    /health must stay reachable so Docker and the mobile app can report it.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("ReMap Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e.message)
        logger.error("Fix the configuration and restart the server.")

    await check_connection()

    db = settings.safe_database_info()
    logger.info("Environment: %s", settings.environment)
    logger.info("Server URL: http://%s:%d", settings.host, settings.port)
    logger.info("Database: %s:%s/%s", db["host"], db["port"], db["database"])
    logger.info("Available endpoints:")
    logger.info("  Health Check: http://localhost:%d/health", settings.port)
    logger.info("  API Info:     http://localhost:%d/api", settings.port)
    logger.info("  Memories:     http://localhost:%d/api/memories", settings.port)
    logger.info("  API docs:     http://localhost:%d/docs", settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ReMap Backend shutting down...")
    try:
        await dispose_engine()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error("Error closing database connections: %s", str(e))
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _original_url(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def route_not_found_body(request: Request) -> dict:
    return {
        "error": "Route not found",
        "message": f"The endpoint {request.method} {_original_url(request)} does not exist",
        "available_endpoints": AVAILABLE_ENDPOINTS,
        "request_id": _request_id(request),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        HTTP 404 / 405          → 404 Route not found (+ available endpoints)
        other HTTP errors       → their own status, {"detail": ...}
        DatabaseError           → 500 Internal server error
        ReMapError (base)       → 500 Internal server error
        Exception (fallback)    → 500; exception text only in development

    Driver errors, SQL and stack traces are logged, never returned.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # An unsupported method on a known path is reported like an unknown route
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=route_not_found_body(request))
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = _request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(ReMapError)
    async def handle_app_error(request: Request, exc: ReMapError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": exc.message if settings.is_development else "Something went wrong",
                "request_id": rid,
            },
        )

    # Starlette answers unhandled exceptions outside the user middleware,
    # so this response gets its headers here
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unhandled error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.is_development else "Something went wrong",
                "request_id": rid,
            },
            headers={**SECURITY_HEADERS, "X-Request-ID": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="ReMap API",
        description="Your Interactive Memory Atlas API: location-based memory sharing.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        responses={404: {"description": "Route not found", "model": NotFoundResponse}},
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute; the resulting order is
    # RequestID → Logging → SecurityHeaders → CORS → route

    # Expo Go connects from LAN and tunnel hosts, so development allows any origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(api.router)

    return app


# uvicorn expects `remap.main:app` to be importable
app = create_app()
