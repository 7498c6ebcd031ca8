"""Command-line health report for a running ReMap backend."""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from remap.config import settings
from remap.monitor.client import (
    DEFAULT_TIMEOUT,
    HealthMonitorClient,
    overall_status,
    run_comprehensive_health_check,
)
from remap.schemas.health import HealthCheckResult, HealthCheckStatus

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    HealthCheckStatus.HEALTHY: "✅",
    HealthCheckStatus.WARNING: "⚠️",
    HealthCheckStatus.ERROR: "❌",
    HealthCheckStatus.CHECKING: "🔄",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="remap-health",
        description="Check that the ReMap backend, its database and its API routes respond",
    )
    parser.add_argument(
        "--base-url",
        default=f"http://localhost:{settings.port}",
        help="Backend root URL (use your machine's LAN IP when testing from a phone)",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT, help="Seconds per request"
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each request")
    return parser


def format_result(result: HealthCheckResult) -> str:
    icon = STATUS_ICONS.get(result.status, "❓")
    lines = [f"{icon} {result.name}: {result.message}"]
    if result.details:
        lines.extend(f"    {line}" for line in result.details.splitlines())
    return "\n".join(lines)


async def collect(base_url: str, timeout: float) -> List[HealthCheckResult]:
    async with HealthMonitorClient(base_url, timeout=timeout) as monitor:
        return await run_comprehensive_health_check(monitor)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    results = asyncio.run(collect(args.base_url, args.timeout))
    status = overall_status(results)

    if args.json:
        payload = {
            "base_url": args.base_url,
            "status": status.value,
            "checks": [r.model_dump(mode="json") for r in results],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(f"ReMap health report for {args.base_url}")
        for result in results:
            print(format_result(result))
        print(f"Overall: {STATUS_ICONS.get(status, '❓')} {status.value}")

    return 0 if status == HealthCheckStatus.HEALTHY else 1


if __name__ == "__main__":
    sys.exit(main())
