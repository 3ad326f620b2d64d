import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.students import service as student_service
from app.auth.models import User
from app.core.models import Fee, Payment


def _student_payload(**overrides) -> dict:
    payload = {
        "name": "Ravi Kumar",
        "email": "ravi@college.edu",
        "password": "password123",
        "registrationNumber": "REG-2024-100",
        "course": "Electrical Engineering",
        "semester": 2,
        "phone": "+911234567890",
        "address": "12 Hostel Road",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_student(client: AsyncClient, admin_headers) -> None:
    response = await client.post("/api/admin/students", json=_student_payload(), headers=admin_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["role"] == "student"
    assert data["semester"] == 2
    assert data["registrationNumber"] == "REG-2024-100"
    assert "password" not in data


@pytest.mark.asyncio
async def test_create_student_duplicate_email(client: AsyncClient, admin_headers, student: User) -> None:
    response = await client.post(
        "/api/admin/students",
        json=_student_payload(email="student@college.edu"),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "User with this email already exists"


@pytest.mark.asyncio
async def test_create_student_duplicate_registration_number(
    client: AsyncClient, admin_headers, student: User
) -> None:
    response = await client.post(
        "/api/admin/students",
        json=_student_payload(registrationNumber="REG-2023-001"),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Registration number already in use"


@pytest.mark.asyncio
@pytest.mark.parametrize("semester", [0, 9, "abc"])
async def test_create_student_invalid_semester(client: AsyncClient, admin_headers, semester) -> None:
    response = await client.post(
        "/api/admin/students",
        json=_student_payload(semester=semester),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "semester" in response.json()["error"]


@pytest.mark.asyncio
async def test_create_student_missing_required_fields(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        "/api/admin/students",
        json={"name": "No Email", "semester": 1},
        headers=admin_headers,
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert "email" in error
    assert "password" in error


@pytest.mark.asyncio
async def test_list_and_get_students(
    client: AsyncClient, admin_headers, admin: User, student: User, other_student: User
) -> None:
    response = await client.get("/api/admin/students", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert {s["id"] for s in body["data"]} == {str(student.id), str(other_student.id)}

    response = await client.get(f"/api/admin/students/{student.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Student User"

    # Admin accounts are not students
    response = await client.get(f"/api/admin/students/{admin.id}", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Student not found"


@pytest.mark.asyncio
async def test_update_student(client: AsyncClient, admin_headers, student: User, other_student: User) -> None:
    response = await client.put(
        f"/api/admin/students/{student.id}",
        json={"course": "Data Science", "semester": 4},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["course"] == "Data Science"
    assert data["semester"] == 4
    assert data["email"] == "student@college.edu"

    response = await client.put(
        f"/api/admin/students/{student.id}",
        json={"registrationNumber": "REG-2023-002"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "Registration number" in response.json()["error"]


@pytest.mark.asyncio
async def test_delete_student_removes_fees_and_payments(
    client: AsyncClient, admin_headers, student: User, make_fee, db_session: AsyncSession
) -> None:
    fee = await make_fee(student, "1000")
    pay = await client.post(
        f"/api/admin/fees/{fee.id}/payments",
        json={"amount": 500, "paymentMethod": "cash"},
        headers=admin_headers,
    )
    assert pay.status_code == 201

    response = await client.delete(f"/api/admin/students/{student.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}

    for model in (User, Fee, Payment):
        column = model.student_id if model is not User else model.id
        remaining = (
            await db_session.execute(select(func.count()).select_from(model).where(column == student.id))
        ).scalar_one()
        assert remaining == 0


@pytest.mark.asyncio
async def test_student_profile(client: AsyncClient, student_headers, other_student: User) -> None:
    response = await client.get("/api/student/profile", headers=student_headers)
    assert response.status_code == 200
    assert response.json()["data"]["registrationNumber"] == "REG-2023-001"

    response = await client.put(
        "/api/student/profile",
        json={"name": "Renamed Student", "phone": "555-0101"},
        headers=student_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Renamed Student"
    assert data["phone"] == "555-0101"

    response = await client.put(
        "/api/student/profile",
        json={"email": "other@college.edu"},
        headers=student_headers,
    )
    assert response.status_code == 400
    assert "email" in response.json()["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_update_student_rejects_blank_name(
    client: AsyncClient, admin_headers, student: User, name
) -> None:
    response = await client.put(
        f"/api/admin/students/{student.id}", json={"name": name}, headers=admin_headers
    )
    assert response.status_code == 400
    assert "name" in response.json()["error"]

    response = await client.get(f"/api/admin/students/{student.id}", headers=admin_headers)
    assert response.json()["data"]["name"] == "Student User"


@pytest.mark.asyncio
async def test_update_student_strips_name(client: AsyncClient, admin_headers, student: User) -> None:
    response = await client.put(
        f"/api/admin/students/{student.id}", json={"name": "  Ravi  "}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Ravi"


@pytest.mark.asyncio
async def test_profile_rejects_blank_name(client: AsyncClient, student_headers) -> None:
    response = await client.put("/api/student/profile", json={"name": "   "}, headers=student_headers)
    assert response.status_code == 400
    assert "name" in response.json()["error"]

    response = await client.get("/api/student/profile", headers=student_headers)
    assert response.json()["data"]["name"] == "Student User"


async def _skip_unique_check(*args, **kwargs) -> None:
    return None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override, message",
    [
        ({"email": "student@college.edu"}, "User with this email already exists"),
        ({"registrationNumber": "REG-2023-001"}, "Registration number already in use"),
    ],
)
async def test_create_student_storage_duplicate(
    client: AsyncClient, admin_headers, student: User, db_session: AsyncSession, monkeypatch, override, message
) -> None:
    """The unique constraints still name the field when the pre-check is bypassed."""
    monkeypatch.setattr(student_service, "ensure_unique_user_fields", _skip_unique_check)

    response = await client.post("/api/admin/students", json=_student_payload(**override), headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": message}

    students = (
        await db_session.execute(select(func.count()).select_from(User).where(User.role == "student"))
    ).scalar_one()
    assert students == 1
