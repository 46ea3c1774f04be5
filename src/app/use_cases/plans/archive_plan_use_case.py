"""
Archive Plan Use Case

Soft-disables a tier. Archived plans cannot be bought, and tenants on them
fail entitlement checks with PLAN_NOT_FOUND until they buy an active plan.
"""

import logging

from libs.result import Result, Return
from src.app.services.plan_catalog import normalize_plan_code
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.domain.errors import plan_not_found
from .dtos import PlanResponse

logger = logging.getLogger(__name__)


class ArchivePlanUseCase:
    """Idempotent: archiving an archived plan returns it unchanged"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, code: str) -> Result[PlanResponse]:
        normalized = normalize_plan_code(code)

        async with self.uow:
            plan = await self.uow.plans.get_by_code(normalized)
            if plan is None:
                return Return.err(plan_not_found(normalized))

            if not plan.is_active:
                return Return.ok(PlanResponse.from_plan(plan))

            plan.is_active = False
            plan = await self.uow.plans.update(plan)

            await self.uow.audit_events.create(
                AuditEvent(action="plan_archived", event_metadata={"plan_code": normalized})
            )

            await self.uow.commit()

            logger.info(f"Plan {normalized} archived")
            return Return.ok(PlanResponse.from_plan(plan))
