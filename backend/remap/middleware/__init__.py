# Middleware package init
"""
ReMap Backend: Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Security Headers] → [CORS] → Route Handler

    1. Request ID first so every later log line can be correlated
    2. Logging measures everything below it
    3. Security headers are applied to every response, errors included
    4. CORS is FastAPI's CORSMiddleware (handles preflight OPTIONS)
"""
