"""
ReMap Backend: API Route Handlers
===================================

What:  GET /api (static API description) and GET /api/memories (placeholder).
How:   /api is a constant document; /api/memories delegates to MemoryService.
Who:   Called by the mobile client and the health monitor.
"""

from fastapi import APIRouter

from remap import __version__
from remap.schemas.errors import ErrorResponse
from remap.schemas.memory import ApiInfoResponse, MemoryListResponse
from remap.services.memory_service import memory_service

router = APIRouter(prefix="/api", tags=["API"])

# Public routes, also listed in 404 responses. Each answers GET and HEAD.
AVAILABLE_ENDPOINTS = ["/health", "/api", "/api/memories"]


@router.head("", include_in_schema=False)
@router.get(
    "",
    response_model=ApiInfoResponse,
    summary="API information",
)
async def api_info() -> ApiInfoResponse:
    return ApiInfoResponse(
        version=__version__,
        endpoints={
            "health": "/health",
            "api_info": "/api",
            "memories": "/api/memories",
        },
        documentation="Interactive docs at /docs (Swagger UI) and /redoc",
    )


@router.head("/memories", include_in_schema=False)
@router.get(
    "/memories",
    response_model=MemoryListResponse,
    responses={
        200: {"description": "Memories near the caller (currently always empty)"},
        500: {"description": "Database query failed", "model": ErrorResponse},
    },
    summary="List memories",
    description=(
        "Placeholder for location-based memory retrieval. Verifies the database "
        "path and returns an empty list with count 0."
    ),
)
async def list_memories() -> MemoryListResponse:
    return await memory_service.list_memories()
