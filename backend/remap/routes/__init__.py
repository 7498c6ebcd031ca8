# Routes package init
"""
ReMap Backend: API Routes Package
===================================

Route Inventory:
    - health.py:  GET /health          (database liveness, uptime)
    - api.py:     GET /api             (API description)
                  GET /api/memories    (memories placeholder)

Routes stay THIN: they call a service and pick the status code.
"""
