"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Not-found is signalled by None, never by an exception
    - Implementations raise DuplicateEmployeeError / DatabaseError (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the pure validators that run
      before them are never async
"""

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Protocol

from app.core.domain_types import EmpId


class EmployeeLike(Protocol):
    """Structural contract for employee rows returned by a repository."""
    id: int
    emp_id: str
    name: str
    email: str
    role: str
    joining_date: date
    training: bool
    project_status: str | None
    project_name: str | None


class EmployeeRepository(Protocol):
    """Contract for employee persistence, implemented by shell."""
    async def list_all(self) -> Sequence[EmployeeLike]: ...
    async def get_by_emp_id(self, emp_id: EmpId) -> EmployeeLike | None: ...
    async def create(self, fields: Mapping) -> EmployeeLike: ...
    async def update(self, emp_id: EmpId, fields: Mapping) -> EmployeeLike | None: ...
    async def delete(self, emp_id: EmpId) -> EmployeeLike | None: ...
