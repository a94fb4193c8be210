"""Employee Repository — five persistence operations over the employees table.

Invariants:
    - Every statement is parameterized (SQLAlchemy Core/ORM constructs, no string SQL)
    - Not-found is returned as None; the caller decides the HTTP mapping
    - A storage-level uniqueness violation on insert is the authoritative duplicate
      signal and raises DuplicateEmployeeError, never DatabaseError
    - Any other store failure rolls back and raises DatabaseError
    - No state is kept between calls beyond the injected request session

Design Decisions:
    - Each write commits its own single statement: no partial-failure states
    - UPDATE/DELETE use RETURNING so the match test and the write are one statement
    - Callers pass validated fields with storage names; unknown keys are ignored
"""

import asyncio
import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import EmpId
from app.core.errors import DatabaseError, DuplicateEmployeeError, ErrorContext
from app.core.validate_fields import parse_calendar_date
from app.models.employee import Employee

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = (
    "name", "email", "role", "joining_date",
    "training", "project_status", "project_name",
)


def _row_values(fields: Mapping) -> dict:
    """Map validated fields onto column values for every mutable column."""
    values = {key: fields.get(key) for key in MUTABLE_FIELDS}
    values["joining_date"] = parse_calendar_date(values["joining_date"])
    values["training"] = bool(values["training"])
    values["project_name"] = values["project_name"] or None
    return values


class SqlEmployeeRepository:
    """EmployeeRepository backed by a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _store_call(self, operation: str, emp_id: str | None = None) -> AsyncIterator[None]:
        """Roll back and map driver failures to DatabaseError."""
        try:
            yield
        except (SQLAlchemyError, asyncio.TimeoutError) as e:
            await self._db.rollback()
            logger.error(
                f"Employee {operation} failed: {e}",
                exc_info=True,
                extra={"operation": operation, "emp_id": emp_id},
            )
            raise DatabaseError(
                type(e).__name__, operation, ErrorContext(emp_id=emp_id),
            ) from e

    async def list_all(self) -> list[Employee]:
        async with self._store_call("list"):
            result = await self._db.execute(
                select(Employee).order_by(Employee.id.desc()),
            )
            return list(result.scalars().all())

    async def get_by_emp_id(self, emp_id: EmpId) -> Employee | None:
        async with self._store_call("get", emp_id):
            result = await self._db.execute(
                select(Employee).where(Employee.emp_id == emp_id),
            )
            return result.scalar_one_or_none()

    async def create(self, fields: Mapping) -> Employee:
        """Insert a validated employee. Duplicate emp_id raises DuplicateEmployeeError."""
        emp_id = fields["emp_id"]
        if await self.get_by_emp_id(emp_id) is not None:
            raise DuplicateEmployeeError(emp_id)

        employee = Employee(emp_id=emp_id, **_row_values(fields))
        async with self._store_call("create", emp_id):
            self._db.add(employee)
            try:
                await self._db.commit()
            except IntegrityError as e:
                await self._db.rollback()
                logger.warning(
                    f"Insert rejected by unique constraint for {emp_id}",
                    extra={"emp_id": emp_id, "error_code": "DUPLICATE_EMPLOYEE_ID"},
                )
                raise DuplicateEmployeeError(emp_id) from e
        logger.info("Employee created", extra={"emp_id": emp_id})
        return employee

    async def update(self, emp_id: EmpId, fields: Mapping) -> Employee | None:
        """Overwrite every mutable field. Returns None when emp_id has no row."""
        async with self._store_call("update", emp_id):
            result = await self._db.execute(
                update(Employee)
                .where(Employee.emp_id == emp_id)
                .values(**_row_values(fields))
                .returning(Employee),
            )
            employee = result.scalar_one_or_none()
            await self._db.commit()
        if employee is not None:
            logger.info("Employee updated", extra={"emp_id": emp_id})
        return employee

    async def delete(self, emp_id: EmpId) -> Employee | None:
        """Remove the row and return its last state, or None when absent."""
        async with self._store_call("delete", emp_id):
            result = await self._db.execute(
                delete(Employee)
                .where(Employee.emp_id == emp_id)
                .returning(Employee),
            )
            employee = result.scalar_one_or_none()
            await self._db.commit()
        if employee is not None:
            logger.info("Employee deleted", extra={"emp_id": emp_id})
        return employee
