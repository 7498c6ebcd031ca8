"""
ReMap Backend: Security Headers Middleware
============================================

What:  Adds standard HTTP hardening headers to every response.
How:   After the route runs, sets each header in SECURITY_HEADERS unless the
       response already carries it.
Who:   Applied to every request via Starlette middleware.

Content-Security-Policy is left out: the API serves JSON, plus the Swagger
UI, which loads its scripts from a CDN.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            if name not in response.headers:
                response.headers[name] = value

        return response
