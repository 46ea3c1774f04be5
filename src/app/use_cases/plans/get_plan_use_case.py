from libs.result import Result, Return
from src.app.services.plan_catalog import PlanCatalog
from src.app.services.unit_of_work import UnitOfWork
from .dtos import PlanResponse


class GetPlanUseCase:
    """Single active plan by code; archived plans are PLAN_NOT_FOUND"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, code: str) -> Result[PlanResponse]:
        async with self.uow:
            result = await PlanCatalog(self.uow).get_active_plan(code)
            if result.is_err():
                return Return.err(result.error)
            return Return.ok(PlanResponse.from_plan(result.value))
