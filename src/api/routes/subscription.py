from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.app.services.dtos import SubscriptionState
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscriptions import (
    CancelSubscriptionUseCase,
    GetSubscriptionUseCase,
    SubscriptionView,
)
from src.depends import ClinicContext, get_clinic_context, get_unit_of_work

router = APIRouter(prefix="/subscription", tags=["Subscription"])


@router.get("", status_code=status.HTTP_200_OK, response_model=SubscriptionView)
async def get_subscription(
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current subscription of the caller's clinic with seat usage"""
    result = await GetSubscriptionUseCase(uow).execute(context.tenant_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/cancel", status_code=status.HTTP_200_OK, response_model=SubscriptionState)
async def cancel_subscription(
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Subscription (self-service)

    Existing doctors stay; adding doctors needs a new payment.
    """
    result = await CancelSubscriptionUseCase(uow).execute(
        context.tenant_id, user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
