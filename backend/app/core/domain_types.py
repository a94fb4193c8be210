"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EmpId wraps the external employee identifier (never the storage id)
    - ProjectStatus.IN_PROJECT is the only status with extra field rules
    - Shape thresholds live here, not scattered as magic numbers

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: compares equal to the raw request string ("in-project")
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmpId = NewType("EmpId", str)


# ─── Enums ───────────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Recognized project status. Any other value is accepted as free text."""
    IN_PROJECT = "in-project"


class EmployeeField(str, Enum):
    """Validated request fields, in the order they are checked."""
    NAME = "name"
    EMP_ID = "empId"
    EMAIL = "email"
    ROLE = "role"
    JOINING_DATE = "joiningDate"
    PROJECT_NAME = "projectName"


# ─── Business Constants ──────────────────────────────────────────

EMP_ID_PREFIX = "ATS0"
RESERVED_EMP_ID = "ATS0000"
DEFAULT_EMAIL_DOMAIN = "astrolitetech.com"

MIN_NAME_LETTERS = 5
MIN_ROLE_LETTERS = 3
MIN_PROJECT_NAME_LETTERS = 5

JOINING_WINDOW_MONTHS = 3
