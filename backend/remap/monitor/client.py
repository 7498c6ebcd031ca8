"""
ReMap Health Monitor: HTTP Client
===================================

What:  Probes a running ReMap backend and turns each probe into a
       HealthCheckResult, the same checks the mobile app's health tab runs.
How:   httpx.AsyncClient with a per-request timeout; transport failures are
       converted into HealthMonitorError inside `_request`, and each check
       method converts that error into an `error` result instead of raising.
Who:   The `remap-health` CLI, and anything else that wants a status report.

Checks:
    - Backend API Connection   GET /health         (status + database section)
    - Database Integration     GET /api/memories   (query path works)
    - API Endpoints            GET /api            (router is mounted)

The three checks run concurrently; there is no retry, cancellation or
deduplication. Callers wait for all three.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from remap.exceptions import HealthMonitorError
from remap.schemas.health import HealthCheckResult, HealthCheckStatus, HealthReport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

BACKEND_CHECK = "Backend API Connection"
DATABASE_CHECK = "Database Integration"
API_CHECK = "API Endpoints"


class HealthMonitorClient:
    """
    Async client for the backend's health surface.

    Usage:
        async with HealthMonitorClient("http://192.168.1.20:3000") as monitor:
            results = await run_comprehensive_health_check(monitor)

    Args:
        base_url: Backend root URL (scheme, host and port).
        timeout:  Seconds allowed per request.
        client:   Pre-built httpx.AsyncClient (tests pass one with a
                  MockTransport). The caller keeps ownership of it.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> "HealthMonitorClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── Transport ─────────────────────────────────────────────────────────

    async def _request(self, endpoint: str) -> Dict[str, Any]:
        """
        GET `endpoint` and return the decoded JSON body.

        Raises:
            HealthMonitorError: kind "timeout", "network", "http" or "payload".
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("Making request to: %s", url)

        try:
            response = await self._client.get(
                url,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise HealthMonitorError(
                "Request timeout - check your network connection",
                kind="timeout",
                context={"url": url},
            ) from e
        except httpx.TransportError as e:
            raise HealthMonitorError(
                "Network error - is the backend server running?",
                kind="network",
                context={"url": url, "detail": str(e)},
            ) from e

        if not response.is_success:
            raise HealthMonitorError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                kind="http",
                status_code=response.status_code,
                context={"url": url},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise HealthMonitorError(
                "Invalid JSON in response", kind="payload", context={"url": url}
            ) from e

        if not isinstance(data, dict):
            raise HealthMonitorError(
                "Unexpected response shape", kind="payload", context={"url": url}
            )

        logger.debug("Response received from %s: %s", url, data)
        return data

    # ── Checks ────────────────────────────────────────────────────────────

    async def check_backend_health(self) -> HealthCheckResult:
        """GET /health: healthy only when status is healthy and the DB is connected."""
        try:
            data = await self._request("/health")

            try:
                report = HealthReport.model_validate(data)
            except ValidationError as e:
                raise HealthMonitorError(
                    "Invalid health check response format",
                    kind="payload",
                    context={"errors": e.error_count()},
                ) from e

            is_healthy = report.status == "healthy" and report.database.connected
            environment = report.environment
            uptime_minutes = round(report.uptime / 60)

            return HealthCheckResult(
                name=BACKEND_CHECK,
                status=HealthCheckStatus.HEALTHY if is_healthy else HealthCheckStatus.WARNING,
                message=(
                    f"Connected to {environment} environment"
                    if is_healthy
                    else "Backend reported issues"
                ),
                details="\n".join([
                    f"Server uptime: {uptime_minutes} minutes",
                    f"Database: {report.database.version}",
                    f"Environment: {environment}",
                    f"Last checked: {report.timestamp}",
                ]),
                last_checked=_now(),
            )
        except HealthMonitorError as e:
            return self._error_result(BACKEND_CHECK, e.message, self._troubleshooting(e))

    async def check_database_integration(self) -> HealthCheckResult:
        """GET /api/memories: any successful JSON answer proves the query path."""
        try:
            data = await self._request("/api/memories")
        except HealthMonitorError as e:
            return self._error_result(DATABASE_CHECK, "Database query failed", e.message)

        return HealthCheckResult(
            name=DATABASE_CHECK,
            status=HealthCheckStatus.HEALTHY,
            message="Database queries working correctly",
            details=(
                f"Sample endpoint response received ({data.get('count', 0)} memories)\n"
                "Ready for memory storage implementation"
            ),
            last_checked=_now(),
        )

    async def check_api_endpoints(self) -> HealthCheckResult:
        """GET /api: the API router answers."""
        try:
            await self._request("/api")
        except HealthMonitorError as e:
            return self._error_result(API_CHECK, "API endpoint test failed", e.message)

        return HealthCheckResult(
            name=API_CHECK,
            status=HealthCheckStatus.HEALTHY,
            message="API endpoints responding correctly",
            details="Core API structure verified\nReady for feature development",
            last_checked=_now(),
        )

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _error_result(name: str, message: str, details: str) -> HealthCheckResult:
        return HealthCheckResult(
            name=name,
            status=HealthCheckStatus.ERROR,
            message=message,
            details=details,
            last_checked=_now(),
        )

    def _troubleshooting(self, error: HealthMonitorError) -> str:
        if error.kind == "timeout":
            return (
                "The backend server took too long to respond. "
                "This might indicate network issues or server problems."
            )
        if error.kind == "network":
            return (
                "Make sure your Docker containers are running with: docker-compose up\n"
                f"Backend should be available at: {self.base_url}"
            )
        return "Check the backend server logs for more details about this error."


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def run_comprehensive_health_check(
    client: HealthMonitorClient,
) -> List[HealthCheckResult]:
    """
    Run all three checks concurrently.

    Returns:
        [backend, database, api] results, always in that order.
    """
    logger.info("Starting comprehensive health check against %s", client.base_url)
    results = await asyncio.gather(
        client.check_backend_health(),
        client.check_database_integration(),
        client.check_api_endpoints(),
    )
    logger.info("Health check completed")
    return list(results)


def overall_status(results: List[HealthCheckResult]) -> HealthCheckStatus:
    """Worst status wins: error > warning > healthy."""
    statuses = {r.status for r in results}
    if HealthCheckStatus.ERROR in statuses:
        return HealthCheckStatus.ERROR
    if HealthCheckStatus.WARNING in statuses:
        return HealthCheckStatus.WARNING
    if HealthCheckStatus.CHECKING in statuses:
        return HealthCheckStatus.CHECKING
    return HealthCheckStatus.HEALTHY
