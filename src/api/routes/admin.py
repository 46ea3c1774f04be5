"""
Admin API Routes - Platform Administration Endpoints

Plan catalog management and billing-system integrations.
Authentication is via Admin API Key, not user JWTs.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.dtos import SubscriptionState
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.plans import (
    ArchivePlanUseCase,
    CreatePlanCommand,
    CreatePlanUseCase,
    ListAllPlansUseCase,
    PlanListResponse,
    PlanResponse,
    UpdatePlanCommand,
    UpdatePlanUseCase,
)
from src.app.use_cases.subscriptions import CancelSubscriptionUseCase, MarkPastDueUseCase
from src.depends import get_unit_of_work

router = APIRouter(
    prefix="/admin", tags=["Admin"], dependencies=[Depends(verify_admin_api_key)]
)


@router.get("/plans", status_code=status.HTTP_200_OK, response_model=PlanListResponse)
async def list_all_plans(uow: UnitOfWork = Depends(get_unit_of_work)):
    """All plans including archived ones"""
    result = await ListAllPlansUseCase(uow).execute()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/plans", status_code=status.HTTP_201_CREATED, response_model=PlanResponse)
async def create_plan(command: CreatePlanCommand, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Create Plan

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 409 Conflict: PLAN_ALREADY_EXISTS (code or tier level taken)
    """
    result = await CreatePlanUseCase(uow).execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.patch("/plans/{code}", status_code=status.HTTP_200_OK, response_model=PlanResponse)
async def update_plan(
    code: str, command: UpdatePlanCommand, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Update Plan (partial)

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: PLAN_NOT_FOUND
        - 409 Conflict: PLAN_ALREADY_EXISTS (tier level taken)
    """
    result = await UpdatePlanUseCase(uow).execute(code, command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/plans/{code}", status_code=status.HTTP_200_OK, response_model=PlanResponse)
async def archive_plan(code: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Archive Plan (soft-disable; the row is kept)"""
    result = await ArchivePlanUseCase(uow).execute(code)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/cancel",
    status_code=status.HTTP_200_OK,
    response_model=SubscriptionState,
)
async def cancel_tenant_subscription(
    tenant_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Cancel a tenant's subscription

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await CancelSubscriptionUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/past-due",
    status_code=status.HTTP_200_OK,
    response_model=SubscriptionState,
)
async def mark_tenant_past_due(tenant_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Mark a tenant's subscription past due (billing integration)

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION (subscription not ACTIVE)
    """
    result = await MarkPastDueUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
