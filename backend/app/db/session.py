"""Schema Bootstrap — creates mapped tables on an async engine.

Invariants:
    - Idempotent: existing tables are left untouched (no migrations, no ALTERs)
    - Every model module is imported first so Base.metadata is complete

Design Decisions:
    - Separate from infrastructure/database.py: usable from scripts with a bare engine
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.base import Base


async def create_tables(engine: AsyncEngine) -> None:
    """Create all mapped tables, including the emp_id unique constraint."""
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
