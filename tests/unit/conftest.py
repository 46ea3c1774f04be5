import pytest
from unittest.mock import AsyncMock, MagicMock


def _repository(*methods):
    repo = MagicMock()
    for name in methods:
        setattr(repo, name, AsyncMock())
    return repo


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = _repository("get_by_email", "create", "update")
    uow.tenants = _repository("get_by_id", "get_by_registration_id", "create", "update")
    uow.plans = _repository("get_by_code", "get_by_tier_level", "list", "create", "update")
    uow.payments = _repository(
        "get_by_id",
        "get_by_provider_order_id",
        "get_by_provider_payment_id",
        "create",
        "complete_if_pending",
        "fail_if_pending",
        "list_by_tenant",
    )
    uow.doctors = _repository("count_active_seats", "get_by_id", "create", "update")
    uow.audit_events = _repository("create")
    return uow

