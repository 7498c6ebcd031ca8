"""
ReMap Backend: Request Logging Middleware
===========================================

What:  One access-log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request ID and client IP on the
       `remap.access` logger.
Who:   Applied to every request via Starlette middleware.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Log line:
    GET /api/memories 200 4.2ms [a1b2c3d4] from 192.168.1.20

Level by status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO. A request
whose handler raised is logged as 500.
Request bodies and headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from remap.config import settings
from remap.middleware.request_id import request_id_var

logger = logging.getLogger("remap.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    /health is polled by Docker every 30 seconds; it is only logged in
    development, where the mobile health tab is being worked on.
    """

    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        if request.url.path in self.QUIET_PATHS and not settings.is_development:
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception:
            # The 500 body is built further out; log the line and re-raise
            self._log(request, 500, start_time)
            raise

        self._log(request, response.status_code, start_time)
        return response

    @staticmethod
    def _log(request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
