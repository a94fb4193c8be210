"""Employee Write Enforcement — ordered validation of create/update payloads.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return error dict on violation, None on success
    - Check order: name -> employee ID (create only) -> email -> role
      -> joining date -> project name (only when status is in-project)
    - First error wins; errors are never aggregated

Design Decisions:
    - Return dicts (not exceptions): the shell decides how to surface the error,
      keeping this module free of HTTP concerns
    - Payload is a plain mapping with storage field names (emp_id, joining_date, ...)
      so the same chain serves both create and update
"""

from collections.abc import Mapping
from datetime import date

from app.core.domain_types import DEFAULT_EMAIL_DOMAIN, EmployeeField, ProjectStatus
from app.core.validate_fields import (
    is_valid_email,
    is_valid_employee_id,
    is_valid_joining_date,
    is_valid_name,
    is_valid_project_name,
    is_valid_role,
)


def _error(field: EmployeeField, error_code: str, message: str) -> dict:
    return {"field": field.value, "error_code": error_code, "message": message}


def check_name(fields: Mapping) -> dict | None:
    if not is_valid_name(fields.get("name")):
        return _error(EmployeeField.NAME, "INVALID_NAME", "Invalid name format")
    return None


def check_employee_id(fields: Mapping) -> dict | None:
    if not is_valid_employee_id(fields.get("emp_id")):
        return _error(
            EmployeeField.EMP_ID, "INVALID_EMPLOYEE_ID", "Invalid employee ID format",
        )
    return None


def check_email(fields: Mapping, domain: str = DEFAULT_EMAIL_DOMAIN) -> dict | None:
    if not is_valid_email(fields.get("email"), domain):
        return _error(EmployeeField.EMAIL, "INVALID_EMAIL", "Invalid email format")
    return None


def check_role(fields: Mapping) -> dict | None:
    if not is_valid_role(fields.get("role")):
        return _error(EmployeeField.ROLE, "INVALID_ROLE", "Invalid role format")
    return None


def check_joining_date(fields: Mapping, today: date | None = None) -> dict | None:
    if not is_valid_joining_date(fields.get("joining_date"), today):
        return _error(
            EmployeeField.JOINING_DATE, "INVALID_JOINING_DATE", "Invalid joining date",
        )
    return None


def check_project_name(fields: Mapping) -> dict | None:
    """Employees on a project need a well-shaped project name; others are unchecked."""
    if fields.get("project_status") != ProjectStatus.IN_PROJECT:
        return None
    project_name = fields.get("project_name")
    if project_name is None or project_name == "":
        return _error(
            EmployeeField.PROJECT_NAME,
            "PROJECT_NAME_REQUIRED",
            "Project name is required for in-project status",
        )
    if not is_valid_project_name(project_name):
        return _error(
            EmployeeField.PROJECT_NAME,
            "INVALID_PROJECT_NAME",
            "Invalid project name format",
        )
    return None


def validate_employee_create(
    fields: Mapping,
    today: date | None = None,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
) -> dict | None:
    """Chain all create checks. Returns first error or None."""
    return (
        check_name(fields)
        or check_employee_id(fields)
        or check_email(fields, email_domain)
        or check_role(fields)
        or check_joining_date(fields, today)
        or check_project_name(fields)
    )


def validate_employee_update(
    fields: Mapping,
    today: date | None = None,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
) -> dict | None:
    """Chain update checks. emp_id is immutable on update, so it is not re-checked."""
    return (
        check_name(fields)
        or check_email(fields, email_domain)
        or check_role(fields)
        or check_joining_date(fields, today)
        or check_project_name(fields)
    )
