"""Employee ORM — persists one employee record per row.

Invariants:
    - id is an integer primary key assigned by storage
    - emp_id is UNIQUE at storage level (authoritative duplicate signal)
    - project_name is NULL unless supplied
    - Rows are hard-deleted; no soft-delete or versioning columns

Design Decisions:
    - Date column for joining_date: validation already reduced input to a calendar day
    - String lengths sized for the validated formats, not arbitrary caps
"""

from datetime import date

from sqlalchemy import Boolean, Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Employee(Base):
    """Employee record, the sole aggregate."""
    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("emp_id", name="uq_employees_emp_id"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    emp_id: Mapped[str] = mapped_column(String(7), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(255), nullable=False)
    joining_date: Mapped[date] = mapped_column(Date, nullable=False)
    training: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    project_status: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )
    project_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
