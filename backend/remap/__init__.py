"""
ReMap Backend: Application Package
====================================

What: Backend API for ReMap, a location-based memory-sharing app.

Layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← health probe, memories
    ├─────────────────────────────────────┤
    │             Schemas (Data)          │  ← Pydantic API contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy engine
    └─────────────────────────────────────┘

    remap.monitor is the client side: it probes a running backend the way
    the mobile app's health tab does.
"""

__version__ = "1.0.0"
