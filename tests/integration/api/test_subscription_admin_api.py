"""
Integration tests for subscription reads and lifecycle endpoints
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from tests.utils.clinic import ADMIN_HEADERS, bearer, pay_with_provider, register_and_verify


@pytest.mark.asyncio
async def test_admin_past_due_blocks_doctors(client: AsyncClient, db_session: AsyncSession, test_data):
    token, tenant_id = await register_and_verify(client, db_session, test_data.get("register_clinic"))
    await pay_with_provider(client, token)

    response = await client.post(f"/admin/tenants/{tenant_id}/past-due", headers=ADMIN_HEADERS)
    assert response.status_code == 200
    assert response.json()["status"] == "PAST_DUE"

    response = await client.post("/doctors", json=test_data.doctor(0), headers=bearer(token))
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "SUBSCRIPTION_INACTIVE"
    assert response.json()["error"]["details"] == {"status": "PAST_DUE"}

    # Paying again reactivates
    await pay_with_provider(client, token, payment_id="pay_test_2")
    response = await client.get("/subscription", headers=bearer(token))
    assert response.json()["status"] == "ACTIVE"


@pytest.mark.asyncio
async def test_past_due_requires_active(client: AsyncClient, db_session: AsyncSession, test_data):
    _, tenant_id = await register_and_verify(client, db_session, test_data.get("register_clinic"))

    response = await client.post(f"/admin/tenants/{tenant_id}/past-due", headers=ADMIN_HEADERS)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_clinic_cancels_own_subscription(client: AsyncClient, db_session: AsyncSession, test_data):
    token, _ = await register_and_verify(client, db_session, test_data.get("register_clinic"))
    await pay_with_provider(client, token)

    response = await client.post("/subscription/cancel", headers=bearer(token))
    assert response.status_code == 200
    assert response.json()["status"] == "CANCELED"

    response = await client.post("/subscription/cancel", headers=bearer(token))
    assert response.status_code == 200
    assert response.json()["changed"] is False

    response = await client.post("/doctors", json=test_data.doctor(0), headers=bearer(token))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_cancel_unknown_tenant(client: AsyncClient):
    response = await client.post(f"/admin/tenants/{uuid4()}/cancel", headers=ADMIN_HEADERS)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TENANT_NOT_FOUND"
