"""
Unit tests for LoginUseCase
"""

from uuid import uuid4

import bcrypt
import pytest

from src.api.utils.jwt import verify_jwt
from src.app.use_cases.auth import LoginUseCase
from src.domain.entities import SubscriptionStatus, User, UserRole
from src.domain.errors import ErrorCode
from tests.fixtures.factories import make_tenant

PASSWORD = "SecurePass123!"
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


def clinic_admin(tenant_id, **overrides) -> User:
    fields = dict(
        id=uuid4(),
        name="Dr. Asha Rao",
        email="asha@sunrise-clinic.in",
        password_hash=PASSWORD_HASH,
        role=UserRole.CLINIC_ADMIN,
        tenant_id=tenant_id,
        email_verified=True,
    )
    fields.update(overrides)
    return User(**fields)


@pytest.mark.asyncio
async def test_successful_login(mock_uow):
    tenant = make_tenant(status=SubscriptionStatus.PENDING_PAYMENT)
    user = clinic_admin(tenant.id)
    mock_uow.users.get_by_email.return_value = user
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await LoginUseCase(mock_uow).execute("ASHA@sunrise-clinic.in", PASSWORD)

    assert result.is_ok()
    response = result.value
    assert response.token_type == "bearer"
    assert response.tenant_id == str(tenant.id)
    assert response.subscription_status == SubscriptionStatus.PENDING_PAYMENT
    assert verify_jwt(response.access_token)["user_id"] == str(user.id)
    assert user.last_login_at is not None
    mock_uow.users.get_by_email.assert_awaited_once_with("asha@sunrise-clinic.in")
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_wrong_password(mock_uow):
    mock_uow.users.get_by_email.return_value = clinic_admin(uuid4())

    result = await LoginUseCase(mock_uow).execute("asha@sunrise-clinic.in", "wrong-password")

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_CREDENTIALS
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_email_same_error(mock_uow):
    mock_uow.users.get_by_email.return_value = None

    result = await LoginUseCase(mock_uow).execute("nobody@example.com", PASSWORD)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_CREDENTIALS
    assert result.error.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_inactive_user_cannot_login(mock_uow):
    mock_uow.users.get_by_email.return_value = clinic_admin(uuid4(), is_active=False)

    result = await LoginUseCase(mock_uow).execute("asha@sunrise-clinic.in", PASSWORD)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_CREDENTIALS
