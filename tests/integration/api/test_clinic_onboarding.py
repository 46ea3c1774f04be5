"""
Integration tests for clinic onboarding

Register -> verify email -> pay -> add doctors up to the plan limit.
"""

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import PaymentRecord, PaymentStatus, Tenant
from tests.fixtures.fake_payment_gateway import sign
from tests.utils.clinic import (
    bearer,
    pay_with_provider,
    register_and_verify,
    verification_code_for,
)


@pytest.mark.asyncio
async def test_full_onboarding_to_seat_limit(client: AsyncClient, db_session: AsyncSession, test_data):
    payload = test_data.get("register_clinic")

    # Register
    response = await client.post("/auth/register", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["subscription_status"] == "PENDING_VERIFICATION"
    assert body["tenant"]["registration_id"] == "KA-MED-2024-001"
    assert body["tenant"]["plan_code"] == "PRO"
    tenant_id = body["tenant"]["id"]

    # Verify
    code = await verification_code_for(db_session, payload["owner"]["email"])
    response = await client.post(
        "/auth/verify-email", json={"email": payload["owner"]["email"], "code": code}
    )
    assert response.status_code == 200
    assert response.json()["subscription_status"] == "PENDING_PAYMENT"
    token = response.json()["access_token"]

    # Order at the catalog price
    response = await client.post(
        "/payments/orders",
        json={"plan_code": "PRO", "billing_cycle": "monthly", "amount_minor_units": 199900},
        headers=bearer(token),
    )
    assert response.status_code == 201
    order = response.json()
    assert order["amount_minor_units"] == 199900
    assert order["currency"] == "INR"
    assert order["key_id"] == "rzp_test_fake"

    # Confirm
    response = await client.post(
        "/payments/confirm",
        json={
            "provider_order_id": order["provider_order_id"],
            "provider_payment_id": "pay_test_1",
            "provider_signature": sign(order["provider_order_id"], "pay_test_1"),
        },
        headers=bearer(token),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "ACTIVE"
    assert response.json()["already_processed"] is False

    response = await client.get("/subscription", headers=bearer(token))
    assert response.status_code == 200
    assert response.json()["status"] == "ACTIVE"
    assert response.json()["seat_limit"] == 3

    # Three doctors fit on PRO
    for doctor in test_data.doctors(3):
        response = await client.post("/doctors", json=doctor, headers=bearer(token))
        assert response.status_code == 201, response.text
    assert response.json()["seats_used"] == 3

    # The fourth does not
    response = await client.post("/doctors", json=test_data.doctor(3), headers=bearer(token))
    assert response.status_code == 403
    error = response.json()["error"]
    assert error["code"] == "SEAT_LIMIT_REACHED"
    assert error["details"] == {"plan_code": "PRO", "limit": 3}

    result = await db_session.exec(select(PaymentRecord).where(PaymentRecord.provider_order_id == order["provider_order_id"]))
    record = result.one()
    assert str(record.tenant_id) == tenant_id
    assert record.status == PaymentStatus.COMPLETED
    assert record.provider_payment_id == "pay_test_1"


@pytest.mark.asyncio
async def test_archived_doctor_frees_seat(client: AsyncClient, db_session: AsyncSession, test_data):
    token, _ = await register_and_verify(client, db_session, test_data.get("register_clinic"))
    await pay_with_provider(client, token)

    doctor_ids = []
    for doctor in test_data.doctors(3):
        response = await client.post("/doctors", json=doctor, headers=bearer(token))
        doctor_ids.append(response.json()["doctor"]["id"])

    response = await client.delete(f"/doctors/{doctor_ids[0]}", headers=bearer(token))
    assert response.status_code == 200
    assert response.json()["is_deleted"] is True

    response = await client.post("/doctors", json=test_data.doctor(3), headers=bearer(token))
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_unverified_clinic_cannot_order(client: AsyncClient, db_session: AsyncSession, test_data):
    payload = test_data.get("register_clinic")
    await client.post("/auth/register", json=payload)
    response = await client.post(
        "/auth/login",
        json={"email": payload["owner"]["email"], "password": payload["owner"]["password"]},
    )
    assert response.status_code == 200
    assert response.json()["subscription_status"] == "PENDING_VERIFICATION"
    token = response.json()["access_token"]

    response = await client.post(
        "/payments/orders", json={"plan_code": "PRO"}, headers=bearer(token)
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVALID_TRANSITION"

    result = await db_session.exec(select(Tenant))
    assert result.one().subscription_status == "PENDING_VERIFICATION"
