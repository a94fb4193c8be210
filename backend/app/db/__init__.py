"""Database Infrastructure — SQLAlchemy declarative base and session factory.

Invariants:
    - One async engine per DatabaseSessionManager (owned by the app lifespan)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL: native async, no thread pool overhead
"""
