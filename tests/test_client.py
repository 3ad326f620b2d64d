from decimal import Decimal

import pytest
from httpx import ASGITransport

from app.auth.models import User
from app.client import ApiError, ClientConfig, FeesApiClient
from app.main import app


@pytest.fixture()
async def api(session_factory):
    config = ClientConfig(base_url="http://test")
    async with FeesApiClient(config, transport=ASGITransport(app=app)) as client:
        yield client


def test_config_is_not_mutated_by_with_token() -> None:
    anonymous = ClientConfig(base_url="http://test")
    signed_in = anonymous.with_token("abc")
    assert anonymous.token is None
    assert anonymous.auth_headers() == {}
    assert signed_in.auth_headers() == {"Authorization": "Bearer abc"}


@pytest.mark.asyncio
async def test_student_flow_with_explicit_credentials(api: FeesApiClient, student: User, make_fee) -> None:
    fee = await make_fee(student, "5000")

    student_cfg = await api.login("student@college.edu", "password123")
    assert api.config.token is None

    me = await api.me(student_cfg)
    assert me["id"] == str(student.id)

    fees = await api.list_fees(student_cfg)
    assert [f["id"] for f in fees] == [str(fee.id)]

    payment = await api.pay_fee(fee.id, Decimal("2000"), "upi", transaction_id="UPI-123", config=student_cfg)
    assert (await api.get_fee(fee.id, student_cfg))["status"] == "partial"

    receipt = await api.get_receipt(payment["id"], student_cfg)
    assert receipt["receiptNumber"] == payment["receiptNumber"]
    assert receipt["transactionId"] == "UPI-123"
    assert len(await api.list_payments(student_cfg)) == 1


@pytest.mark.asyncio
async def test_two_identities_side_by_side(api: FeesApiClient, admin: User, student: User) -> None:
    admin_cfg = await api.login("admin@college.edu", "password123")
    student_cfg = await api.login("student@college.edu", "password123")

    stats = await api.statistics(admin_cfg)
    assert stats["totalStudents"] == 1

    with pytest.raises(ApiError) as exc_info:
        await api.statistics(student_cfg)
    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_errors_carry_envelope_message(api: FeesApiClient, student: User) -> None:
    with pytest.raises(ApiError) as exc_info:
        await api.login("student@college.edu", "nope")
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid credentials"

    with pytest.raises(ApiError) as exc_info:
        await api.me()
    assert exc_info.value.status_code == 401
