"""
Unit tests for CreateOrderUseCase and ConfirmPaymentUseCase

Transaction boundaries around the payment ledger.
"""

import pytest

from src.app.use_cases.billing import (
    ConfirmPaymentCommand,
    ConfirmPaymentUseCase,
    CreateOrderCommand,
    CreateOrderUseCase,
)
from src.domain.entities import BillingCycle, SubscriptionStatus
from src.domain.errors import ErrorCode
from tests.fixtures.factories import make_payment, make_plan, make_tenant
from tests.fixtures.fake_payment_gateway import TEST_KEY_ID, FakePaymentGateway, sign


@pytest.fixture
def billing_uow(mock_uow):
    mock_uow.plans.get_by_code.side_effect = lambda code: make_plan(code) if code == "PRO" else None
    mock_uow.payments.create.side_effect = lambda record: record
    mock_uow.payments.get_by_provider_order_id.return_value = None
    mock_uow.payments.get_by_provider_payment_id.return_value = None
    return mock_uow


@pytest.mark.asyncio
async def test_create_order_commits_pending_record(billing_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_PAYMENT)
    billing_uow.tenants.get_by_id.return_value = tenant
    command = CreateOrderCommand(
        tenant_id=tenant.id, plan_code="PRO", billing_cycle="Monthly", amount_minor_units=100
    )

    result = await CreateOrderUseCase(billing_uow, FakePaymentGateway()).execute(command)

    assert result.is_ok()
    assert result.value.amount_minor_units == 199900
    assert result.value.billing_cycle == BillingCycle.monthly
    assert result.value.key_id == TEST_KEY_ID
    billing_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_order_rejects_unknown_cycle(billing_uow):
    command = CreateOrderCommand(tenant_id=make_tenant().id, plan_code="PRO", billing_cycle="weekly")

    result = await CreateOrderUseCase(billing_uow, FakePaymentGateway()).execute(command)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_BILLING_CYCLE
    billing_uow.tenants.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_create_order_failure_does_not_commit(billing_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_PAYMENT)
    billing_uow.tenants.get_by_id.return_value = tenant
    gateway = FakePaymentGateway()
    gateway.fail = True

    result = await CreateOrderUseCase(billing_uow, gateway).execute(
        CreateOrderCommand(tenant_id=tenant.id, plan_code="PRO")
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.ORDER_CREATION_FAILED
    billing_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_confirm_commits_activation(billing_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_PAYMENT)
    record = make_payment(tenant.id)
    billing_uow.tenants.get_by_id.return_value = tenant
    billing_uow.payments.get_by_provider_order_id.return_value = record
    billing_uow.payments.complete_if_pending.return_value = True

    result = await ConfirmPaymentUseCase(billing_uow, FakePaymentGateway()).execute(
        ConfirmPaymentCommand(
            tenant_id=tenant.id,
            provider_order_id="order_test_1",
            provider_payment_id="pay_1",
            provider_signature=sign("order_test_1", "pay_1"),
        )
    )

    assert result.is_ok()
    assert result.value.status == SubscriptionStatus.ACTIVE
    assert result.value.already_processed is False
    billing_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_confirm_signature_mismatch_commits_failure(billing_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_PAYMENT)
    billing_uow.tenants.get_by_id.return_value = tenant
    billing_uow.payments.get_by_provider_order_id.return_value = make_payment(tenant.id)

    result = await ConfirmPaymentUseCase(billing_uow, FakePaymentGateway()).execute(
        ConfirmPaymentCommand(
            provider_order_id="order_test_1",
            provider_payment_id="pay_1",
            provider_signature="forged",
        )
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.SIGNATURE_MISMATCH
    billing_uow.payments.fail_if_pending.assert_awaited_once()
    billing_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_confirm_other_errors_roll_back(billing_uow):
    billing_uow.payments.get_by_provider_order_id.return_value = None

    result = await ConfirmPaymentUseCase(billing_uow, FakePaymentGateway()).execute(
        ConfirmPaymentCommand(
            provider_order_id="order_missing",
            provider_payment_id="pay_1",
            provider_signature="sig",
        )
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.PAYMENT_RECORD_NOT_FOUND
    billing_uow.commit.assert_not_called()
