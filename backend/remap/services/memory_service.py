"""
ReMap Backend: Memory Service
===============================

What:  Business logic behind GET /api/memories.
How:   Queries the database clock to prove the data path works, then returns
       an empty memory list. Memory storage (by location, by user) slots in
       here once the schema exists.
Who:   Called by the memories route handler.

Error Handling:
    Database failures surface as DatabaseError("Database query failed"),
    which the global handler turns into a 500 response.
"""

import logging

from remap import database
from remap.schemas.memory import MemoryListResponse

logger = logging.getLogger(__name__)


class MemoryService:

    async def list_memories(self) -> MemoryListResponse:
        """
        Return the (currently empty) list of memories.

        Returns:
            MemoryListResponse with `memories == []` and `count == 0`; the
            timestamp is the database server time.

        Raises:
            DatabaseError: the database query failed.
        """
        server_time = await database.fetch_server_time()
        logger.debug("Memories requested at database time %s", server_time)
        return MemoryListResponse(timestamp=server_time)


memory_service = MemoryService()
