"""
ReMap Backend: Request ID Middleware
======================================

What:  Assigns a correlation ID to each request and returns it in X-Request-ID.
How:   Uses the client-provided X-Request-ID header when present, otherwise a
       short random UUID; stores it in a ContextVar for loggers and error
       handlers and on request.state for route handlers.
Who:   Applied to every request via Starlette middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the request, or generate an 8-char ID
        2. Store it in request_id_var and request.state.request_id
        3. Echo it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
