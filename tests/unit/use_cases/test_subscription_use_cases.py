"""
Unit tests for subscription read and lifecycle use cases
"""

from uuid import uuid4

import pytest

from src.app.use_cases.subscriptions import (
    CancelSubscriptionUseCase,
    GetSubscriptionUseCase,
    MarkPastDueUseCase,
)
from src.domain.entities import SubscriptionStatus
from src.domain.errors import ErrorCode
from tests.fixtures.factories import make_plan, make_tenant


@pytest.mark.asyncio
async def test_get_subscription_counts_seats(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.ACTIVE, plan_code="ENTERPRISE")
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.plans.get_by_code.return_value = make_plan("ENTERPRISE")
    mock_uow.doctors.count_active_seats.return_value = 2

    result = await GetSubscriptionUseCase(mock_uow).execute(tenant.id)

    assert result.is_ok()
    view = result.value
    assert view.status == SubscriptionStatus.ACTIVE
    assert view.plan_code == "ENTERPRISE"
    assert view.seats_used == 2
    assert view.seat_limit == 5
    assert view.unlimited is False


@pytest.mark.asyncio
async def test_get_subscription_unknown_tenant(mock_uow):
    mock_uow.tenants.get_by_id.return_value = None

    result = await GetSubscriptionUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == ErrorCode.TENANT_NOT_FOUND


@pytest.mark.asyncio
async def test_cancel_commits(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.ACTIVE)
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await CancelSubscriptionUseCase(mock_uow).execute(tenant.id)

    assert result.is_ok()
    assert result.value.status == SubscriptionStatus.CANCELED
    assert tenant.subscription_canceled_at is not None
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_past_due_requires_active(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_PAYMENT)
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await MarkPastDueUseCase(mock_uow).execute(tenant.id)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_TRANSITION
    mock_uow.commit.assert_not_called()
