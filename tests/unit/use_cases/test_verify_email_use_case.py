"""
Unit tests for VerifyEmailUseCase

Tests all business logic with mocked dependencies.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.api.utils.jwt import verify_jwt
from src.app.use_cases.auth import VerifyEmailUseCase
from src.domain.entities import SubscriptionStatus, User, UserRole
from src.domain.errors import ErrorCode
from tests.fixtures.factories import make_tenant
from tests.utils.audit import audit_actions


def unverified_owner(tenant_id, code="482913", expires_in=timedelta(minutes=5)) -> User:
    return User(
        id=uuid4(),
        name="Dr. Asha Rao",
        email="asha@sunrise-clinic.in",
        password_hash="hashed_password",
        role=UserRole.CLINIC_ADMIN,
        tenant_id=tenant_id,
        email_verified=False,
        verification_code=code,
        verification_expires_at=datetime.utcnow() + expires_in,
    )


@pytest.mark.asyncio
async def test_successful_email_verification(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_VERIFICATION)
    user = unverified_owner(tenant.id)
    mock_uow.users.get_by_email.return_value = user
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await VerifyEmailUseCase(mock_uow).execute("Asha@Sunrise-Clinic.in", "482913")

    assert result.is_ok()
    assert result.value.status == "verified"
    assert result.value.subscription_status == SubscriptionStatus.PENDING_PAYMENT
    assert user.email_verified is True
    assert user.verification_code is None
    assert user.verification_expires_at is None
    assert tenant.subscription_status == SubscriptionStatus.PENDING_PAYMENT

    payload = verify_jwt(result.value.access_token)
    assert payload["user_id"] == str(user.id)
    assert payload["tenant_id"] == str(tenant.id)
    assert payload["role"] == UserRole.CLINIC_ADMIN.value

    assert audit_actions(mock_uow) == ["subscription_pending_payment", "email_verified"]
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_wrong_code(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_VERIFICATION)
    user = unverified_owner(tenant.id)
    mock_uow.users.get_by_email.return_value = user

    result = await VerifyEmailUseCase(mock_uow).execute(user.email, "000000")

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_VERIFICATION_CODE
    assert user.email_verified is False
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_expired_code(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_VERIFICATION)
    user = unverified_owner(tenant.id, expires_in=timedelta(minutes=-1))
    mock_uow.users.get_by_email.return_value = user

    result = await VerifyEmailUseCase(mock_uow).execute(user.email, "482913")

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_VERIFICATION_CODE
    assert "expired" in result.error.message.lower()
    mock_uow.tenants.update.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_email(mock_uow):
    mock_uow.users.get_by_email.return_value = None

    result = await VerifyEmailUseCase(mock_uow).execute("nobody@example.com", "482913")

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_VERIFICATION_CODE


@pytest.mark.asyncio
async def test_already_verified_is_success(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.ACTIVE)
    user = unverified_owner(tenant.id, code=None)
    user.email_verified = True
    mock_uow.users.get_by_email.return_value = user
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await VerifyEmailUseCase(mock_uow).execute(user.email, "123456")

    assert result.is_ok()
    assert "already" in result.value.message.lower()
    assert result.value.access_token is None
    assert result.value.subscription_status == SubscriptionStatus.ACTIVE
    assert tenant.subscription_status == SubscriptionStatus.ACTIVE
    mock_uow.tenants.update.assert_not_called()
    assert audit_actions(mock_uow) == []
