"""Employee Routes — end-to-end HTTP behaviour through the FastAPI app.

Invariants:
    - POST valid -> 201 with the submitted emp_id; same emp_id again -> 400
    - first failing rule decides the 400 message
    - unknown emp_id -> 404 on GET/PUT/DELETE
    - DELETE -> 200 then GET -> 404
    - store failures -> 500 with a generic message, logged at ERROR once
    - unknown paths and methods answer with {"error": ...}
    - routes work with any EmployeeRepository implementation
"""

import logging
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.validate_fields import subtract_months
from app.main import app
from app.api.routes.employees import get_repository
from app.infrastructure.database import get_db
from app.services.employee_repository import SqlEmployeeRepository


async def _create(client, payload):
    res = await client.post("/employees", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


# ─── POST ────────────────────────────────────────────────────────

async def test_create_returns_201_with_record(client, valid_payload):
    res = await client.post("/employees", json=valid_payload)

    assert res.status_code == 201
    body = res.json()
    assert body["id"] > 0
    assert body["emp_id"] == "ATS0001"
    assert body["name"] == "John Doe"
    assert body["joining_date"] == valid_payload["joiningDate"]
    assert body["training"] is True
    assert body["project_status"] == "in-project"
    assert body["project_name"] == "Apollo Project"


async def test_create_duplicate_emp_id_returns_400(client, valid_payload):
    await _create(client, valid_payload)
    res = await client.post("/employees", json={**valid_payload, "name": "Other Person"})

    assert res.status_code == 400
    assert res.json() == {"error": "Employee ID already exists"}


@pytest.mark.parametrize("overrides, message", [
    ({"name": "Jo"}, "Invalid name format"),
    ({"name": "John  Doe"}, "Invalid name format"),
    ({"empId": "ATS0000"}, "Invalid employee ID format"),
    ({"empId": "ats0001"}, "Invalid employee ID format"),
    ({"email": "abcd@astrolitetech.com"}, "Invalid email format"),
    ({"email": "ab123@other.com"}, "Invalid email format"),
    ({"role": "QA"}, "Invalid role format"),
    ({"joiningDate": "not-a-date"}, "Invalid joining date"),
    ({"projectName": "AB"}, "Invalid project name format"),
    ({"projectName": ""}, "Project name is required for in-project status"),
])
async def test_create_rejects_invalid_field(client, valid_payload, overrides, message):
    res = await client.post("/employees", json={**valid_payload, **overrides})

    assert res.status_code == 400
    assert res.json() == {"error": message}


async def test_create_reports_only_first_failure(client, valid_payload):
    res = await client.post("/employees", json={
        **valid_payload, "name": "X", "empId": "bad", "email": "bad",
    })
    assert res.json() == {"error": "Invalid name format"}


async def test_create_rejects_missing_fields_in_rule_order(client):
    res = await client.post("/employees", json={})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid name format"}


async def test_create_rejects_future_and_stale_dates(client, valid_payload, today):
    future = (today + timedelta(days=1)).isoformat()
    stale = (subtract_months(today, 3) - timedelta(days=1)).isoformat()
    for joining in (future, stale):
        res = await client.post("/employees", json={**valid_payload, "joiningDate": joining})
        assert res.json() == {"error": "Invalid joining date"}


async def test_create_accepts_window_start(client, valid_payload, today):
    payload = {**valid_payload, "joiningDate": subtract_months(today, 3).isoformat()}
    await _create(client, payload)


async def test_create_without_project_stores_null(client, valid_payload):
    payload = {**valid_payload, "projectStatus": "bench"}
    del payload["projectName"]
    body = await _create(client, payload)
    assert body["project_name"] is None


async def test_create_malformed_types_return_400(client, valid_payload):
    res = await client.post("/employees", json={**valid_payload, "training": "maybe"})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid request data"}


# ─── GET ─────────────────────────────────────────────────────────

async def test_list_returns_newest_first(client, valid_payload):
    await _create(client, {**valid_payload, "empId": "ATS0001"})
    await _create(client, {**valid_payload, "empId": "ATS0002"})

    res = await client.get("/employees")
    assert res.status_code == 200
    assert [e["emp_id"] for e in res.json()] == ["ATS0002", "ATS0001"]


async def test_list_empty(client):
    res = await client.get("/employees")
    assert res.status_code == 200
    assert res.json() == []


async def test_get_by_emp_id(client, valid_payload):
    created = await _create(client, valid_payload)
    res = await client.get("/employees/ATS0001")
    assert res.status_code == 200
    assert res.json() == created


async def test_get_unknown_returns_404(client):
    res = await client.get("/employees/ATS0999")
    assert res.status_code == 404
    assert res.json() == {"error": "Employee not found"}


# ─── PUT ─────────────────────────────────────────────────────────

def _update_body(payload: dict, **overrides) -> dict:
    body = {k: v for k, v in payload.items() if k != "empId"}
    body.update(overrides)
    return body


async def test_update_returns_updated_record(client, valid_payload):
    created = await _create(client, valid_payload)
    res = await client.put(
        "/employees/ATS0001",
        json=_update_body(valid_payload, role="Senior Developer", training=False),
    )

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == created["id"]
    assert body["role"] == "Senior Developer"
    assert body["training"] is False


async def test_update_in_project_without_project_name_returns_400(client, valid_payload):
    await _create(client, valid_payload)
    res = await client.put(
        "/employees/ATS0001",
        json=_update_body(valid_payload, projectStatus="in-project", projectName=""),
    )
    assert res.status_code == 400

    unchanged = await client.get("/employees/ATS0001")
    assert unchanged.json()["project_name"] == "Apollo Project"


async def test_update_leaving_project_clears_project_name(client, valid_payload):
    await _create(client, valid_payload)
    res = await client.put(
        "/employees/ATS0001",
        json=_update_body(valid_payload, projectStatus="bench", projectName=""),
    )
    assert res.status_code == 200
    assert res.json()["project_name"] is None


async def test_update_validates_before_lookup(client, valid_payload):
    res = await client.put("/employees/ATS0999", json=_update_body(valid_payload, email="x"))
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid email format"}


async def test_update_unknown_returns_404(client, valid_payload):
    res = await client.put("/employees/ATS0999", json=_update_body(valid_payload))
    assert res.status_code == 404
    assert res.json() == {"error": "Employee not found"}


# ─── DELETE ──────────────────────────────────────────────────────

async def test_delete_then_get_returns_404(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.delete("/employees/ATS0001")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Employee deleted successfully"
    assert body["employee"]["id"] == created["id"]

    res = await client.get("/employees/ATS0001")
    assert res.status_code == 404


async def test_delete_unknown_returns_404(client):
    res = await client.delete("/employees/ATS0999")
    assert res.status_code == 404
    assert res.json() == {"error": "Employee not found"}


# ─── Store failures ──────────────────────────────────────────────

async def test_store_failure_returns_500_without_details(client, broken_session):
    app.dependency_overrides[get_repository] = (
        lambda: SqlEmployeeRepository(broken_session)
    )

    res = await client.get("/employees")

    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}
    assert "connection lost" not in res.text


async def test_store_failure_is_logged_once(client, broken_session, caplog):
    app.dependency_overrides[get_repository] = (
        lambda: SqlEmployeeRepository(broken_session)
    )

    with caplog.at_level(logging.INFO):
        res = await client.get("/employees")

    assert res.status_code == 500
    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert errors[0].exc_info is not None


# ─── Unique constraint through the HTTP layer ────────────────────

async def test_constraint_duplicate_returns_400_not_500(client, valid_payload):
    """Two creates racing past the pre-check: the insert that loses gets 400."""
    await _create(client, valid_payload)

    def repository_without_precheck(db: AsyncSession = Depends(get_db)):
        repo = SqlEmployeeRepository(db)
        repo.get_by_emp_id = AsyncMock(return_value=None)
        return repo

    app.dependency_overrides[get_repository] = repository_without_precheck
    res = await client.post("/employees", json={**valid_payload, "name": "Racing Person"})
    del app.dependency_overrides[get_repository]

    assert res.status_code == 400
    assert res.json() == {"error": "Employee ID already exists"}

    listed = await client.get("/employees")
    assert [e["name"] for e in listed.json()] == ["John Doe"]


# ─── Framework errors ────────────────────────────────────────────

async def test_unknown_route_uses_error_body(client):
    res = await client.get("/nope")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


async def test_wrong_method_uses_error_body(client):
    res = await client.patch("/employees/ATS0001", json={})
    assert res.status_code == 405
    assert res.json() == {"error": "Method Not Allowed"}


# ─── Routes depend on the repository protocol ────────────────────

class InMemoryEmployeeRepository:
    """EmployeeRepository over a plain list; no database involved."""

    def __init__(self, rows):
        self.rows = list(rows)

    async def list_all(self):
        return sorted(self.rows, key=lambda r: r.id, reverse=True)

    async def get_by_emp_id(self, emp_id):
        return next((r for r in self.rows if r.emp_id == emp_id), None)

    async def create(self, fields):
        row = SimpleNamespace(id=len(self.rows) + 1, **fields)
        self.rows.append(row)
        return row

    async def update(self, emp_id, fields):
        row = await self.get_by_emp_id(emp_id)
        if row is not None:
            for key, value in fields.items():
                if key != "emp_id":
                    setattr(row, key, value)
        return row

    async def delete(self, emp_id):
        row = await self.get_by_emp_id(emp_id)
        if row is not None:
            self.rows.remove(row)
        return row


async def test_routes_accept_any_repository_implementation(client, today):
    row = SimpleNamespace(
        id=7, emp_id="ATS0007", name="Grace Hopper",
        email="grace@astrolitetech.com", role="Admiral",
        joining_date=today, training=False,
        project_status="bench", project_name=None,
    )
    repo = InMemoryEmployeeRepository([row])
    app.dependency_overrides[get_repository] = lambda: repo

    found = await client.get("/employees/ATS0007")
    missing = await client.get("/employees/ATS0008")
    deleted = await client.delete("/employees/ATS0007")

    assert found.status_code == 200
    assert found.json()["name"] == "Grace Hopper"
    assert missing.status_code == 404
    assert deleted.json()["employee"]["id"] == 7
    assert repo.rows == []
