"""Field Predicates — one pure accept/reject function per employee field.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every predicate returns bool and never raises, whatever the input type
    - Patterns are ASCII-only and must match the WHOLE value (re.fullmatch)
    - Joining dates are compared against an injectable `today`

Design Decisions:
    - One shared shape rule (has_valid_shape) parameterized by letter threshold:
      name, role and project name differ only in the minimum letter count
    - Calendar-month subtraction clamps to month end (May 31 - 3 months = Feb 28)
      rather than approximating with 90 days
    - Unparseable dates are rejected, never coerced to a default
    - Only extended calendar-date text is accepted (no ISO week or basic format)
"""

import calendar
import re
from datetime import date, datetime

from app.core.domain_types import (
    DEFAULT_EMAIL_DOMAIN,
    EMP_ID_PREFIX,
    JOINING_WINDOW_MONTHS,
    MIN_NAME_LETTERS,
    MIN_PROJECT_NAME_LETTERS,
    MIN_ROLE_LETTERS,
    RESERVED_EMP_ID,
)

_EMP_ID_PATTERN = re.compile(re.escape(EMP_ID_PREFIX) + r"[0-9]{3}")
_SHAPE_PATTERN = re.compile(r"[A-Za-z]+(?: [A-Za-z]+)*")
_EMAIL_LOCAL_PART = r"[A-Za-z0-9][A-Za-z0-9._]{4,}"
_CALENDAR_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def is_valid_employee_id(value: object) -> bool:
    """ATS0 followed by exactly three digits, except the reserved ATS0000."""
    if not isinstance(value, str):
        return False
    return bool(_EMP_ID_PATTERN.fullmatch(value)) and value != RESERVED_EMP_ID


def is_valid_email(value: object, domain: str = DEFAULT_EMAIL_DOMAIN) -> bool:
    """Company address: alnum first char, 5+ char local part, fixed domain."""
    if not isinstance(value, str):
        return False
    pattern = f"{_EMAIL_LOCAL_PART}@{re.escape(domain)}"
    return re.fullmatch(pattern, value) is not None


def has_valid_shape(value: object, min_letters: int) -> bool:
    """Letters separated by single spaces, with at least min_letters letters."""
    if not isinstance(value, str):
        return False
    if not _SHAPE_PATTERN.fullmatch(value):
        return False
    return len(value.replace(" ", "")) >= min_letters


def is_valid_name(value: object) -> bool:
    return has_valid_shape(value, MIN_NAME_LETTERS)


def is_valid_role(value: object) -> bool:
    return has_valid_shape(value, MIN_ROLE_LETTERS)


def is_valid_project_name(value: object) -> bool:
    """Absent or empty project names pass; anything else must meet the shape rule."""
    if value is None or value == "":
        return True
    return has_valid_shape(value, MIN_PROJECT_NAME_LETTERS)


def subtract_months(day: date, months: int) -> date:
    """Step back whole calendar months, clamping the day to the target month."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def parse_calendar_date(value: object) -> date | None:
    """Parse a date object, YYYY-MM-DD, or an ISO datetime starting with YYYY-MM-DD.

    Week dates and the compact basic format are rejected. Returns None when
    unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if not _CALENDAR_DATE.match(text):
        return None
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        if text[10] not in "T ":
            return None
        # "Z" suffix is not accepted by fromisoformat before Python 3.11
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def is_valid_joining_date(value: object, today: date | None = None) -> bool:
    """Date must fall in [today - 3 calendar months, today], both ends inclusive."""
    joined = parse_calendar_date(value)
    if joined is None:
        return False
    today = today or date.today()
    earliest = subtract_months(today, JOINING_WINDOW_MONTHS)
    return earliest <= joined <= today
