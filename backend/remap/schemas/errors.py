"""
ReMap Backend: Error Response Schemas
=======================================

What:  Error bodies returned by the global exception handlers in main.py.
How:   Referenced from route `responses=` declarations so they appear in
       the OpenAPI docs; handlers build the same shape as plain dicts.

Example (unknown route):
    {
        "error": "Route not found",
        "message": "The endpoint GET /api/nope does not exist",
        "available_endpoints": ["/health", "/api", "/api/memories"],
        "request_id": "a1b2c3d4"
    }
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(description="Short error title")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class NotFoundResponse(ErrorResponse):
    available_endpoints: List[str] = Field(description="Routes this server does serve")
