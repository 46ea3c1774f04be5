from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.plans import (
    GetPlanUseCase,
    ListActivePlansUseCase,
    PlanListResponse,
    PlanResponse,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/plans", tags=["Plans"])


@router.get("", status_code=status.HTTP_200_OK, response_model=PlanListResponse)
async def list_plans(uow: UnitOfWork = Depends(get_unit_of_work)):
    """Active plans ordered by tier level (public)"""
    result = await ListActivePlansUseCase(uow).execute()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/{code}", status_code=status.HTTP_200_OK, response_model=PlanResponse)
async def get_plan(code: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get Plan by code (public)

    Raises:
        - 404 Not Found: PLAN_NOT_FOUND (unknown or archived)
    """
    result = await GetPlanUseCase(uow).execute(code)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
