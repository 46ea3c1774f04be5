from libs.result import Result, Return
from src.app.services.plan_catalog import PlanCatalog
from src.app.services.unit_of_work import UnitOfWork
from .dtos import PlanListResponse, PlanResponse


class ListActivePlansUseCase:
    """Public catalog: purchasable plans ordered by tier level"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[PlanListResponse]:
        async with self.uow:
            plans = await PlanCatalog(self.uow).list_active_plans()
            items = [PlanResponse.from_plan(plan) for plan in plans]
            return Return.ok(PlanListResponse(plans=items, count=len(items)))


class ListAllPlansUseCase:
    """Admin catalog: every plan including archived ones"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[PlanListResponse]:
        async with self.uow:
            plans = await PlanCatalog(self.uow).list_all_plans()
            items = [PlanResponse.from_plan(plan) for plan in plans]
            return Return.ok(PlanListResponse(plans=items, count=len(items)))
