"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; errors always use {"error": <message>}

Design Decisions:
    - Thin routes: validate with core, persist with the repository, nothing else
"""
