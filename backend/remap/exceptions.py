"""
ReMap Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the few error scenarios ReMap has.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       JSON error responses; the health route handles DatabaseError itself.
Who:   Raised by the database layer, services and the health monitor.

Exception Hierarchy:
    ReMapError (base)
    ├── DatabaseError        → 500 Internal Server Error (503 on /health)
    ├── ConfigurationError   → raised at startup, logged, never sent to clients
    └── HealthMonitorError   → client side; converted into an error HealthCheckResult
"""

from typing import Any, Dict, Optional


class ReMapError(Exception):
    """
    Base exception for all ReMap application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class DatabaseError(ReMapError):
    """
    Raised when the database is unreachable or a query fails.

    HTTP:    500 Internal Server Error from data endpoints,
             503 Service Unavailable from GET /health.

    The message is generic; the driver error is only kept in `context`
    (class name and text) for server-side logging.
    """

    def __init__(
        self,
        message: str = "Database query failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(ReMapError):
    """Settings are not usable for the current environment."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class HealthMonitorError(ReMapError):
    """
    Raised by the health monitor when a probe request fails.

    What:    Timeout, network failure, non-2xx status or malformed payload.
    When:    Inside HealthMonitorClient; the check methods catch it and
             return an `error` HealthCheckResult instead of propagating.

    Attributes:
        kind:        "timeout", "network", "http" or "payload"
        status_code: HTTP status for kind == "http", otherwise None
    """

    def __init__(
        self,
        message: str,
        kind: str = "http",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["kind"] = kind
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.kind = kind
        self.status_code = status_code
