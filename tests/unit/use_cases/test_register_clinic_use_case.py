"""
Unit tests for RegisterClinicUseCase

Tests all business logic with mocked dependencies.
"""

import pytest
import bcrypt

from src.app.use_cases.auth import ClinicDetails, OwnerDetails, RegisterClinicCommand, RegisterClinicUseCase
from src.domain.entities import SubscriptionStatus, UserRole
from src.domain.errors import ErrorCode
from tests.fixtures.factories import make_plan, make_tenant
from tests.utils.audit import audit_actions


def build_command(plan_code="PRO", **owner_overrides) -> RegisterClinicCommand:
    owner = dict(
        name="Dr. Asha Rao",
        email="  Asha@Sunrise-Clinic.in ",
        password="SecurePass123!",
        phone="+91-9800000001",
    )
    owner.update(owner_overrides)
    return RegisterClinicCommand(
        owner=OwnerDetails(**owner),
        clinic=ClinicDetails(
            name="Sunrise Clinic", registration_id="ka-med-2024-001", address="12 MG Road, Bengaluru"
        ),
        plan_code=plan_code,
    )


@pytest.fixture
def register_uow(mock_uow):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.tenants.get_by_registration_id.return_value = None
    mock_uow.users.create.side_effect = lambda user: user
    mock_uow.tenants.create.side_effect = lambda tenant: tenant
    plans = {code: make_plan(code) for code in ("PRO", "ENTERPRISE")}
    mock_uow.plans.get_by_code.side_effect = lambda code: plans.get(code)
    return mock_uow


@pytest.mark.asyncio
async def test_register_creates_owner_and_pending_clinic(register_uow):
    result = await RegisterClinicUseCase(register_uow).execute(build_command("enterprise"))

    assert result.is_ok()
    response = result.value
    assert response.user.email == "asha@sunrise-clinic.in"
    assert response.user.role == UserRole.CLINIC_ADMIN.value
    assert response.user.email_verified is False
    assert response.tenant.registration_id == "KA-MED-2024-001"
    assert response.tenant.plan_code == "ENTERPRISE"
    assert response.tenant.slug.startswith("sunrise-clinic-")
    assert response.subscription_status == SubscriptionStatus.PENDING_VERIFICATION

    user = register_uow.users.create.call_args.args[0]
    tenant = register_uow.tenants.create.call_args.args[0]
    assert user.tenant_id == tenant.id
    assert tenant.owner_id == user.id
    assert len(user.verification_code) == 6 and user.verification_code.isdigit()
    assert user.verification_expires_at is not None
    assert bcrypt.checkpw(b"SecurePass123!", user.password_hash.encode())

    assert audit_actions(register_uow) == ["tenant_registered"]
    register_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("requested", [None, "", "GOLD"])
async def test_register_defaults_to_pro(register_uow, requested):
    result = await RegisterClinicUseCase(register_uow).execute(build_command(requested))

    assert result.is_ok()
    assert result.value.tenant.plan_code == "PRO"


@pytest.mark.asyncio
async def test_register_duplicate_email(register_uow):
    register_uow.users.get_by_email.return_value = object()

    result = await RegisterClinicUseCase(register_uow).execute(build_command())

    assert result.is_err()
    assert result.error.code == ErrorCode.EMAIL_ALREADY_EXISTS
    register_uow.users.create.assert_not_called()
    register_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_duplicate_registration_id(register_uow):
    register_uow.tenants.get_by_registration_id.return_value = make_tenant()

    result = await RegisterClinicUseCase(register_uow).execute(build_command())

    assert result.is_err()
    assert result.error.code == ErrorCode.REGISTRATION_ID_IN_USE
    register_uow.tenants.get_by_registration_id.assert_awaited_once_with("KA-MED-2024-001")
    register_uow.tenants.create.assert_not_called()


@pytest.mark.asyncio
async def test_register_blank_required_field(register_uow):
    result = await RegisterClinicUseCase(register_uow).execute(build_command(email="   "))

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    register_uow.users.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_register_failure_midway_commits_nothing(register_uow):
    register_uow.tenants.create.side_effect = RuntimeError("database unavailable")

    with pytest.raises(RuntimeError):
        await RegisterClinicUseCase(register_uow).execute(build_command())

    register_uow.users.create.assert_awaited_once()
    register_uow.audit_events.create.assert_not_called()
    register_uow.commit.assert_not_called()
    register_uow.__aexit__.assert_awaited_once()
