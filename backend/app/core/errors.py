"""Error Hierarchy — typed, categorized exceptions for all registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are expected user input; infrastructure errors
      (500-level) are critical and logged with full detail
    - to_response() produces the REST envelope {"error": <message>}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with EmployeeRegistryError base: one global handler catches all
    - ErrorContext as dataclass: observability data kept off the response body
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for logs only; never serialized to the client."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    emp_id: str | None = None
    debug_info: dict[str, Any] | None = None


class EmployeeRegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        public_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.public_message = public_message or message

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        return {"error": self.public_message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class FieldValidationError(EmployeeRegistryError):
    """A request field failed its format or business rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, context, 400,
        )
        self.field = field

    @classmethod
    def from_check(cls, error: dict, context: ErrorContext | None = None):
        """Build from an enforce_employee error dict."""
        exc = cls(error["message"], error["field"], context)
        exc.code = error["error_code"]
        return exc


class DuplicateEmployeeError(EmployeeRegistryError):
    """emp_id already taken (pre-check or storage uniqueness violation)."""
    def __init__(self, emp_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.emp_id = emp_id
        super().__init__(
            "Employee ID already exists", "DUPLICATE_EMPLOYEE_ID",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, ctx, 400,
        )
        self.emp_id = emp_id


class EmployeeNotFoundError(EmployeeRegistryError):
    """No row carries the requested emp_id."""
    def __init__(self, emp_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.emp_id = emp_id
        super().__init__(
            "Employee not found", "EMPLOYEE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, ctx, 404,
        )
        self.emp_id = emp_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(EmployeeRegistryError):
    """Store operation failed. Detail is logged, the client sees a generic message."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
            public_message="Internal server error",
        )
        self.operation = operation
