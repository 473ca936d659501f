"""Tests for employee CRUD endpoints."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from employee_manager.api.deps import get_db
from employee_manager.main import app
from employee_manager.models.employee import Employee


@pytest.mark.asyncio
async def test_create_employee(async_client: AsyncClient, auth_headers, employee_payload):
    """POST /employees should create a new employee."""
    resp = await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "A"
    assert data["email"] == "a@x.com"
    assert data["salary"] == 50000
    assert data["id"]
    assert data["created_at"]


@pytest.mark.asyncio
async def test_created_employee_round_trips(async_client: AsyncClient, auth_headers, employee_payload):
    create = await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    eid = create.json()["id"]

    resp = await async_client.get(f"/api/employees/{eid}", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    for field, value in employee_payload.items():
        assert data[field] == value
    assert data["id"] == eid
    assert data["created_at"] == create.json()["created_at"]


@pytest.mark.asyncio
async def test_create_duplicate_email_rejected(async_client: AsyncClient, auth_headers, employee_payload):
    """Creating two employees with the same email should fail."""
    first = await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    second = await async_client.post(
        "/api/employees",
        json={**employee_payload, "name": "B", "position": "QA", "salary": 1},
        headers=auth_headers,
    )
    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["detail"] == "Employee email already exists"


@pytest.mark.asyncio
async def test_employee_email_uniqueness_is_case_sensitive(
    async_client: AsyncClient, auth_headers, employee_payload
):
    await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    resp = await async_client.post(
        "/api/employees", json={**employee_payload, "email": "A@X.com"}, headers=auth_headers
    )
    assert resp.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "email", "position", "department", "salary"])
async def test_create_requires_all_fields(
    async_client: AsyncClient, auth_headers, employee_payload, missing
):
    body = {k: v for k, v in employee_payload.items() if k != missing}
    resp = await async_client.post("/api/employees", json=body, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "All fields are required"


@pytest.mark.asyncio
async def test_create_rejects_blank_and_null_fields(
    async_client: AsyncClient, auth_headers, employee_payload
):
    for patch in ({"name": "  "}, {"salary": None}, {"department": ""}):
        resp = await async_client.post(
            "/api/employees", json={**employee_payload, **patch}, headers=auth_headers
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "All fields are required"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "salary, status",
    [(0, 201), (-1, 400), (1_000_000_000, 400), (999_999_999, 201)],
)
async def test_salary_bounds(async_client: AsyncClient, auth_headers, employee_payload, salary, status):
    resp = await async_client.post(
        "/api/employees", json={**employee_payload, "salary": salary}, headers=auth_headers
    )
    assert resp.status_code == status
    if status == 400:
        assert resp.json()["detail"] == "Salary must be between 0 and 999999999"


@pytest.mark.asyncio
@pytest.mark.parametrize("salary", [True, False])
async def test_boolean_salary_is_rejected(
    async_client: AsyncClient, auth_headers, employee_payload, salary
):
    resp = await async_client.post(
        "/api/employees", json={**employee_payload, "salary": salary}, headers=auth_headers
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Salary must be a number"


@pytest.mark.asyncio
async def test_list_employees_newest_first(async_client: AsyncClient, auth_headers, db_session):
    """GET /employees should return every record, most recent first."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i, name in enumerate(["oldest", "middle", "newest"]):
        db_session.add(
            Employee(
                name=name,
                email=f"{name}@x.com",
                position="Dev",
                department="Eng",
                salary=1000,
                created_at=base + timedelta(days=i),
            )
        )
    await db_session.commit()

    resp = await async_client.get("/api/employees", headers=auth_headers)
    assert resp.status_code == 200
    assert [e["name"] for e in resp.json()] == ["newest", "middle", "oldest"]


@pytest.mark.asyncio
async def test_get_employee_not_found(async_client: AsyncClient, auth_headers):
    """Requesting a non-existent employee should return 404."""
    resp = await async_client.get("/api/employees/does-not-exist", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Employee not found"


@pytest.mark.asyncio
async def test_update_employee(async_client: AsyncClient, auth_headers, employee_payload):
    """PUT /employees/{id} replaces every mutable field."""
    create = await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    original = create.json()

    replacement = {
        "name": "New Name",
        "email": "new@x.com",
        "position": "Lead",
        "department": "Sales",
        "salary": 75000.5,
    }
    resp = await async_client.put(
        f"/api/employees/{original['id']}", json=replacement, headers=auth_headers
    )
    assert resp.status_code == 200
    data = resp.json()
    for field, value in replacement.items():
        assert data[field] == value
    assert data["id"] == original["id"]
    assert data["created_at"] == original["created_at"]


@pytest.mark.asyncio
async def test_update_requires_all_fields(async_client: AsyncClient, auth_headers, employee_payload):
    create = await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    resp = await async_client.put(
        f"/api/employees/{create.json()['id']}",
        json={"name": "Only a name"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "All fields are required"


@pytest.mark.asyncio
async def test_update_rejects_email_of_another_employee(
    async_client: AsyncClient, auth_headers, employee_payload
):
    await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    other = await async_client.post(
        "/api/employees", json={**employee_payload, "email": "b@x.com"}, headers=auth_headers
    )
    resp = await async_client.put(
        f"/api/employees/{other.json()['id']}", json=employee_payload, headers=auth_headers
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Employee email already exists"


@pytest.mark.asyncio
async def test_update_may_keep_own_email(async_client: AsyncClient, auth_headers, employee_payload):
    create = await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    resp = await async_client.put(
        f"/api/employees/{create.json()['id']}",
        json={**employee_payload, "salary": 60000},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["salary"] == 60000


@pytest.mark.asyncio
async def test_update_unknown_employee(async_client: AsyncClient, auth_headers, employee_payload):
    resp = await async_client.put("/api/employees/missing", json=employee_payload, headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_employee(async_client: AsyncClient, auth_headers, employee_payload):
    """DELETE /employees/{id} removes the record for good."""
    create = await async_client.post("/api/employees", json=employee_payload, headers=auth_headers)
    eid = create.json()["id"]

    resp = await async_client.delete(f"/api/employees/{eid}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Employee deleted successfully"}

    assert (await async_client.get(f"/api/employees/{eid}", headers=auth_headers)).status_code == 404
    listed = await async_client.get("/api/employees", headers=auth_headers)
    assert listed.json() == []


@pytest.mark.asyncio
async def test_delete_unknown_employee_is_always_404(async_client: AsyncClient, auth_headers):
    for _ in range(3):
        resp = await async_client.delete("/api/employees/never-existed", headers=auth_headers)
        assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("POST", "/api/employees"),
        ("GET", "/api/employees"),
        ("GET", "/api/employees/x"),
        ("PUT", "/api/employees/x"),
        ("DELETE", "/api/employees/x"),
    ],
)
async def test_every_employee_route_requires_token(
    async_client: AsyncClient, employee_payload, method, path
):
    body = employee_payload if method in ("POST", "PUT") else None
    resp = await async_client.request(method, path, json=body)
    assert resp.status_code == 401
    assert resp.json()["detail"] == "No authorization token provided"


@pytest.mark.asyncio
async def test_unknown_route_returns_404(async_client: AsyncClient):
    resp = await async_client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["success"] is False


class _BrokenSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.mark.asyncio
async def test_persistence_failure_is_generic_500(auth_headers):
    async def _broken_db():
        yield _BrokenSession()

    app.dependency_overrides[get_db] = _broken_db
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/api/employees", headers=auth_headers)
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error", "success": False}
    assert "connection refused" not in resp.text


@pytest.mark.asyncio
async def test_health_is_public(async_client: AsyncClient):
    resp = await async_client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class _EmptyResult:
    def scalar_one_or_none(self):
        return None


class _CommitFailsSession:
    def __init__(self):
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        return _EmptyResult()

    def add(self, obj):
        pass

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    async def rollback(self):
        self.rolled_back = True


@pytest.mark.asyncio
async def test_failed_commit_rolls_back_and_hides_detail(auth_headers, employee_payload, caplog):
    session = _CommitFailsSession()

    async def _failing_db():
        yield session

    app.dependency_overrides[get_db] = _failing_db
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post("/api/employees", json=employee_payload, headers=auth_headers)
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error", "success": False}
    assert "disk I/O error" not in resp.text
    assert "disk I/O error" in caplog.text
    assert session.rolled_back
