# Services package init
"""
ReMap Backend: Services Layer
===============================

What:  Business logic between the routes (HTTP) and the database layer.
How:   Each service is a stateless class with a module-level singleton;
       routes call the singleton, tests patch `remap.database` functions.

Service Inventory:
    - HealthService: database liveness probe → /health payload
    - MemoryService: memories placeholder → /api/memories payload
"""
