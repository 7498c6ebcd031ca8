"""
ReMap Backend: Server Entry Point
===================================

Usage:
    python -m remap          (or the `remap-server` console script)

Binds to HOST:PORT from settings (0.0.0.0:3000 by default) so phones on the
same LAN can reach the API. uvicorn handles SIGINT/SIGTERM: it stops
accepting connections, runs the lifespan shutdown (closing the database
pool) and gives in-flight requests up to 10 seconds to finish.
"""

import uvicorn

from remap.config import settings

GRACEFUL_SHUTDOWN_TIMEOUT = 10


def main() -> None:
    uvicorn.run(
        "remap.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
        server_header=False,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_TIMEOUT,
    )


if __name__ == "__main__":
    main()
