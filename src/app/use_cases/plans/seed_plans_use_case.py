from libs.result import Result, Return
from src.app.services.plan_catalog import PlanCatalog
from src.app.services.unit_of_work import UnitOfWork


class SeedPlansUseCase:
    """Insert the default tiers that are missing; run at startup"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[int]:
        async with self.uow:
            created = await PlanCatalog(self.uow).seed_defaults()
            await self.uow.commit()
            return Return.ok(created)
