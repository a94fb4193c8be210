"""Infrastructure Layer — database pool and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic except the error types
    - Store failures are mapped to DatabaseError before leaving this layer

Design Decisions:
    - Resource owners (DatabaseSessionManager) are constructed explicitly by the
      app lifespan and injected, never created at import time
"""
