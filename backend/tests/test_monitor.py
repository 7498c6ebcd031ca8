"""
ReMap Health Monitor: Client Tests
====================================

What we test:
    ✅ Healthy / degraded / malformed /health payloads
    ✅ Timeout, network and HTTP error mapping with troubleshooting details
    ✅ Database and API checks
    ✅ Comprehensive check ordering and overall status
    ✅ End-to-end against the real app over ASGI

Backends are simulated with httpx.MockTransport.
"""

import httpx
import pytest

from remap.monitor.client import (
    API_CHECK,
    BACKEND_CHECK,
    DATABASE_CHECK,
    HealthMonitorClient,
    overall_status,
    run_comprehensive_health_check,
)
from remap.schemas.health import HealthCheckResult, HealthCheckStatus

BASE_URL = "http://192.168.1.20:3000"

HEALTHY_BODY = {
    "status": "healthy",
    "timestamp": "2025-06-01T10:00:00+00:00",
    "environment": "development",
    "database": {
        "connected": True,
        "current_time": "2025-06-01T10:00:00+00:00",
        "version": "PostgreSQL 17.2",
    },
    "uptime": 600.0,
}

MEMORIES_BODY = {
    "message": "Memories endpoint - ready for implementation",
    "timestamp": "2025-06-01T10:00:00+00:00",
    "memories": [],
    "count": 0,
}

API_BODY = {"message": "Welcome to ReMap API", "version": "1.0.0"}


def backend(routes):
    """Build a monitor whose requests are answered by `routes` (path → response or exception)."""

    def handler(request: httpx.Request) -> httpx.Response:
        outcome = routes.get(request.url.path)
        if outcome is None:
            return httpx.Response(404, json={"error": "Route not found"})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HealthMonitorClient(BASE_URL, client=client), client


def all_ok():
    return {
        "/health": httpx.Response(200, json=HEALTHY_BODY),
        "/api/memories": httpx.Response(200, json=MEMORIES_BODY),
        "/api": httpx.Response(200, json=API_BODY),
    }


class TestBackendHealthCheck:

    @pytest.mark.asyncio
    async def test_healthy(self):
        monitor, client = backend(all_ok())
        async with client:
            result = await monitor.check_backend_health()

        assert result.name == BACKEND_CHECK
        assert result.status == HealthCheckStatus.HEALTHY
        assert result.message == "Connected to development environment"
        assert "Server uptime: 10 minutes" in result.details
        assert "Database: PostgreSQL 17.2" in result.details
        assert result.last_checked is not None

    @pytest.mark.asyncio
    async def test_disconnected_database_is_warning(self):
        body = dict(HEALTHY_BODY, database=dict(HEALTHY_BODY["database"], connected=False))
        monitor, client = backend({"/health": httpx.Response(200, json=body)})
        async with client:
            result = await monitor.check_backend_health()

        assert result.status == HealthCheckStatus.WARNING
        assert result.message == "Backend reported issues"

    @pytest.mark.asyncio
    async def test_malformed_payload(self):
        monitor, client = backend({"/health": httpx.Response(200, json={"status": "healthy"})})
        async with client:
            result = await monitor.check_backend_health()

        assert result.status == HealthCheckStatus.ERROR
        assert result.message == "Invalid health check response format"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("uptime", [None, "ten minutes"])
    async def test_non_numeric_uptime_is_malformed(self, uptime):
        body = dict(HEALTHY_BODY, uptime=uptime)
        monitor, client = backend({"/health": httpx.Response(200, json=body)})
        async with client:
            result = await monitor.check_backend_health()

        assert result.status == HealthCheckStatus.ERROR
        assert result.message == "Invalid health check response format"

    @pytest.mark.asyncio
    async def test_non_numeric_uptime_does_not_abort_report(self):
        routes = all_ok()
        routes["/health"] = httpx.Response(200, json=dict(HEALTHY_BODY, uptime=None))
        monitor, client = backend(routes)
        async with client:
            results = await run_comprehensive_health_check(monitor)

        assert [r.status for r in results] == [
            HealthCheckStatus.ERROR,
            HealthCheckStatus.HEALTHY,
            HealthCheckStatus.HEALTHY,
        ]
        assert overall_status(results) == HealthCheckStatus.ERROR

    @pytest.mark.asyncio
    async def test_degraded_status_is_warning(self):
        body = dict(HEALTHY_BODY, status="degraded")
        monitor, client = backend({"/health": httpx.Response(200, json=body)})
        async with client:
            result = await monitor.check_backend_health()

        assert result.status == HealthCheckStatus.WARNING

    @pytest.mark.asyncio
    async def test_service_unavailable(self):
        unhealthy = {"status": "unhealthy", "error": "Database connection failed", "uptime": 1}
        monitor, client = backend({"/health": httpx.Response(503, json=unhealthy)})
        async with client:
            result = await monitor.check_backend_health()

        assert result.status == HealthCheckStatus.ERROR
        assert result.message == "HTTP 503: Service Unavailable"
        assert "server logs" in result.details

    @pytest.mark.asyncio
    async def test_timeout(self):
        monitor, client = backend({"/health": httpx.ReadTimeout("timed out")})
        async with client:
            result = await monitor.check_backend_health()

        assert result.status == HealthCheckStatus.ERROR
        assert result.message == "Request timeout - check your network connection"
        assert "took too long" in result.details

    @pytest.mark.asyncio
    async def test_network_error(self):
        monitor, client = backend({"/health": httpx.ConnectError("connection refused")})
        async with client:
            result = await monitor.check_backend_health()

        assert result.message == "Network error - is the backend server running?"
        assert "docker-compose up" in result.details
        assert BASE_URL in result.details


class TestOtherChecks:

    @pytest.mark.asyncio
    async def test_database_integration_ok(self):
        monitor, client = backend(all_ok())
        async with client:
            result = await monitor.check_database_integration()

        assert result.name == DATABASE_CHECK
        assert result.status == HealthCheckStatus.HEALTHY
        assert result.message == "Database queries working correctly"

    @pytest.mark.asyncio
    async def test_database_integration_failure(self):
        monitor, client = backend({"/api/memories": httpx.Response(500, json={})})
        async with client:
            result = await monitor.check_database_integration()

        assert result.status == HealthCheckStatus.ERROR
        assert result.message == "Database query failed"
        assert result.details == "HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_api_endpoints_failure(self):
        monitor, client = backend({})
        async with client:
            result = await monitor.check_api_endpoints()

        assert result.name == API_CHECK
        assert result.status == HealthCheckStatus.ERROR
        assert result.message == "API endpoint test failed"


class TestComprehensiveCheck:

    @pytest.mark.asyncio
    async def test_results_in_fixed_order(self):
        monitor, client = backend(all_ok())
        async with client:
            results = await run_comprehensive_health_check(monitor)

        assert [r.name for r in results] == [BACKEND_CHECK, DATABASE_CHECK, API_CHECK]
        assert overall_status(results) == HealthCheckStatus.HEALTHY

    @pytest.mark.asyncio
    async def test_partial_failure(self):
        routes = all_ok()
        routes["/api/memories"] = httpx.Response(500, json={})
        monitor, client = backend(routes)
        async with client:
            results = await run_comprehensive_health_check(monitor)

        assert results[0].status == HealthCheckStatus.HEALTHY
        assert results[1].status == HealthCheckStatus.ERROR
        assert overall_status(results) == HealthCheckStatus.ERROR

    @pytest.mark.asyncio
    async def test_against_running_app(self, db_up):
        from remap.main import app

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            monitor = HealthMonitorClient("http://test", client=client)
            results = await run_comprehensive_health_check(monitor)

        assert all(r.status == HealthCheckStatus.HEALTHY for r in results)


class TestOverallStatus:

    def make(self, status):
        return HealthCheckResult(name="x", status=status, message="m")

    def test_warning_beats_healthy(self):
        results = [self.make(HealthCheckStatus.HEALTHY), self.make(HealthCheckStatus.WARNING)]
        assert overall_status(results) == HealthCheckStatus.WARNING

    def test_error_beats_warning(self):
        results = [self.make(HealthCheckStatus.WARNING), self.make(HealthCheckStatus.ERROR)]
        assert overall_status(results) == HealthCheckStatus.ERROR
