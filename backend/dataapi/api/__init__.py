"""API Layer — FastAPI routes, dependencies, instrumentation and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; every error body is an ErrorResponse

Design Decisions:
    - Thin routes delegate to collaborators reached through Depends providers
"""
