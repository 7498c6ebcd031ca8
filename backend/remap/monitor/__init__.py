"""
ReMap Health Monitor
=====================

Client-side counterpart of GET /health: runs the backend, database and API
checks against a running server and reports each as a HealthCheckResult.
"""

from remap.monitor.client import (
    HealthMonitorClient,
    overall_status,
    run_comprehensive_health_check,
)

__all__ = ["HealthMonitorClient", "overall_status", "run_comprehensive_health_check"]
