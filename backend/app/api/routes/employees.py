"""Employee Routes — list, get, create, update and delete by emp_id.

Invariants:
    - Writes run the ordered core rule chain BEFORE touching the store
    - First failing rule -> 400 with that rule's message; nothing is persisted
    - Unknown emp_id -> 404 on get/update/delete
    - Duplicate emp_id -> 400 whether caught by pre-check or by the unique constraint
    - One session per request, released by get_db on every exit path

Design Decisions:
    - get_employee_or_404 shared by every single-record route
    - Repository built per request from the injected session (no shared state)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import EmpId
from app.core.enforce_employee import (
    validate_employee_create, validate_employee_update,
)
from app.core.errors import (
    EmployeeNotFoundError, ErrorContext, FieldValidationError,
)
from app.core.repository_protocols import EmployeeLike, EmployeeRepository
from app.infrastructure.database import get_db
from app.schemas.employee import (
    EmployeeCreate, EmployeeDeleted, EmployeeResponse, EmployeeUpdate,
)
from app.services.employee_repository import SqlEmployeeRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employees", tags=["employees"])


def get_repository(db: AsyncSession = Depends(get_db)) -> EmployeeRepository:
    return SqlEmployeeRepository(db)


def _raise_if_invalid(error: dict | None, emp_id: str | None) -> None:
    if error is not None:
        raise FieldValidationError.from_check(error, ErrorContext(emp_id=emp_id))


async def get_employee_or_404(
    emp_id: EmpId, repo: EmployeeRepository,
) -> EmployeeLike:
    employee = await repo.get_by_emp_id(emp_id)
    if employee is None:
        raise EmployeeNotFoundError(emp_id)
    return employee


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(repo: EmployeeRepository = Depends(get_repository)):
    """All employees, newest first."""
    return await repo.list_all()


@router.get("/{emp_id}", response_model=EmployeeResponse)
async def get_employee(
    emp_id: str, repo: EmployeeRepository = Depends(get_repository),
):
    return await get_employee_or_404(EmpId(emp_id), repo)


@router.post(
    "", response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeCreate,
    repo: EmployeeRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Validate, reject duplicates, insert."""
    fields = body.to_fields()
    _raise_if_invalid(
        validate_employee_create(fields, email_domain=settings.company_email_domain),
        fields.get("emp_id"),
    )
    return await repo.create(fields)


@router.put("/{emp_id}", response_model=EmployeeResponse)
async def update_employee(
    emp_id: str,
    body: EmployeeUpdate,
    repo: EmployeeRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Validate, then overwrite every mutable field of an existing employee."""
    fields = body.to_fields()
    _raise_if_invalid(
        validate_employee_update(fields, email_domain=settings.company_email_domain),
        emp_id,
    )
    employee = await repo.update(EmpId(emp_id), fields)
    if employee is None:
        raise EmployeeNotFoundError(emp_id)
    return employee


@router.delete("/{emp_id}", response_model=EmployeeDeleted)
async def delete_employee(
    emp_id: str, repo: EmployeeRepository = Depends(get_repository),
):
    employee = await repo.delete(EmpId(emp_id))
    if employee is None:
        raise EmployeeNotFoundError(emp_id)
    return EmployeeDeleted(employee=EmployeeResponse.model_validate(employee))
