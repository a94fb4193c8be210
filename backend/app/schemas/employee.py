"""Employee Schemas — request bodies (camelCase) and response records (snake_case).

Invariants:
    - Request field names follow the web client: empId, joiningDate, projectStatus, projectName
    - Every business-validated field is optional here, so a missing value is reported
      by the ordered rule chain ("Invalid name format") rather than a generic type error
    - Responses use the storage field names (emp_id, joining_date, ...)

Design Decisions:
    - populate_by_name: tests and scripts may build payloads with snake_case names
    - to_fields() hands core a plain dict keyed by storage names
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class EmployeeUpdate(BaseModel):
    """PUT body: every mutable field; emp_id comes from the path."""
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    role: str | None = None
    joining_date: str | None = Field(None, alias="joiningDate")
    training: bool = False
    project_status: str | None = Field(None, alias="projectStatus")
    project_name: str | None = Field(None, alias="projectName")

    def to_fields(self) -> dict:
        return self.model_dump(by_alias=False)


class EmployeeCreate(EmployeeUpdate):
    """POST body: mutable fields plus the external employee ID."""
    emp_id: str | None = Field(None, alias="empId")


class EmployeeResponse(BaseModel):
    """Employee record as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    emp_id: str
    name: str
    email: str
    role: str
    joining_date: date
    training: bool
    project_status: str | None = None
    project_name: str | None = None


class EmployeeDeleted(BaseModel):
    """DELETE confirmation with the removed record."""
    message: str = "Employee deleted successfully"
    employee: EmployeeResponse
