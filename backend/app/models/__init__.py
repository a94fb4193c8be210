"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Employee is the only entity

Design Decisions:
    - Models imported here so Base.metadata is complete before create_all runs
"""

from app.models.employee import Employee  # noqa: F401
