"""
ReMap Backend: Memory & API Info Schemas
==========================================

What:  API contract for the memories placeholder and the /api info document.
Why:   Documents the MemoryPin shape the mobile client already renders, so the
       OpenAPI schema shows what /api/memories will eventually return.

Memories are not persisted. `MemoryListResponse.memories` is always empty
until memory storage is implemented.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field


class MemoryType(str, Enum):
    PHOTO = "photo"
    TEXT = "text"
    AUDIO = "audio"


class MemoryPin(BaseModel):
    """A user-authored note pinned to a geographic location."""
    id: str = Field(description="Memory identifier")
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    title: str
    description: str
    timestamp: datetime = Field(description="When the memory was created")
    type: MemoryType
    author: str


class MemoryListResponse(BaseModel):
    """Body of GET /api/memories."""
    message: str = Field(default="Memories endpoint - ready for implementation")
    timestamp: datetime = Field(description="Database server time of the query")
    memories: List[MemoryPin] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
    note: str = Field(
        default="This endpoint is ready for implementing the full memory logic"
    )


class ApiInfoResponse(BaseModel):
    """Body of GET /api: static description of the API surface."""
    message: str = Field(default="Welcome to ReMap API")
    version: str
    description: str = Field(default="Your Interactive Memory Atlas API")
    endpoints: Dict[str, str]
    documentation: str
