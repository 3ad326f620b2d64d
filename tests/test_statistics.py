from decimal import Decimal

import pytest
from httpx import AsyncClient

from app.auth.models import User


@pytest.mark.asyncio
async def test_statistics_empty(client: AsyncClient, admin_headers) -> None:
    response = await client.get("/api/admin/statistics", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalStudents"] == 0
    assert data["totalFees"] == 0
    assert data["totalPayments"] == 0
    assert Decimal(data["totalPaid"]) == 0
    assert data["feesData"] == []


@pytest.mark.asyncio
async def test_statistics_groups_fees_by_status(
    client: AsyncClient,
    admin_headers,
    student: User,
    other_student: User,
    make_user,
    make_fee,
) -> None:
    await make_user(name="Third Student", email="third@college.edu", semester=1)
    await make_fee(student, "1000")
    paid_fee = await make_fee(other_student, "2000")
    paid = await client.post(
        f"/api/admin/fees/{paid_fee.id}/payments",
        json={"amount": 2000, "paymentMethod": "cash"},
        headers=admin_headers,
    )
    assert paid.status_code == 201

    response = await client.get("/api/admin/statistics", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalStudents"] == 3
    assert data["totalFees"] == 2
    assert data["totalPayments"] == 1
    assert Decimal(data["totalPaid"]) == Decimal("2000")

    by_status = {row["status"]: row for row in data["feesData"]}
    assert set(by_status) == {"pending", "paid"}
    assert by_status["pending"]["count"] == 1
    assert Decimal(by_status["pending"]["totalAmount"]) == Decimal("1000")
    assert by_status["paid"]["count"] == 1
    assert Decimal(by_status["paid"]["totalAmount"]) == Decimal("2000")


@pytest.mark.asyncio
async def test_statistics_admin_only(client: AsyncClient, student_headers) -> None:
    response = await client.get("/api/admin/statistics", headers=student_headers)
    assert response.status_code == 403
