"""Domain Types — verifies type wrappers, enum values and business constants."""

from app.core.domain_types import (
    EmpId,
    EmployeeField,
    ProjectStatus,
    MIN_NAME_LETTERS,
    MIN_PROJECT_NAME_LETTERS,
    MIN_ROLE_LETTERS,
)


def test_emp_id_wraps_str():
    assert EmpId("ATS0001") == "ATS0001"


def test_in_project_compares_to_raw_string():
    assert ProjectStatus.IN_PROJECT == "in-project"
    assert "in-project" == ProjectStatus.IN_PROJECT


def test_field_order_matches_check_order():
    assert [f.value for f in EmployeeField] == [
        "name", "empId", "email", "role", "joiningDate", "projectName",
    ]


def test_letter_thresholds():
    assert (MIN_NAME_LETTERS, MIN_ROLE_LETTERS, MIN_PROJECT_NAME_LETTERS) == (5, 3, 5)


def test_employee_id_pattern_follows_prefix():
    from app.core.domain_types import EMP_ID_PREFIX
    from app.core.validate_fields import is_valid_employee_id

    assert EMP_ID_PREFIX == "ATS0"
    assert is_valid_employee_id(EMP_ID_PREFIX + "123")
    assert not is_valid_employee_id("ATS1" + "123")
