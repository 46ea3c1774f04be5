"""
Update Plan Use Case

Partial update of a catalog tier (platform admin only). Price changes
apply to new orders only; existing payment records keep their amounts.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.plan_catalog import normalize_plan_code
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.domain.errors import ErrorCode, plan_not_found
from .dtos import PlanResponse, UpdatePlanCommand
from .validation import validate_plan_fields

logger = logging.getLogger(__name__)


class UpdatePlanUseCase:
    """
    Use case for updating a plan.

    Business Rules:
    - Code is immutable
    - Only fields present in the command change
    - Tier level must stay unique
    - Records audit event plan_updated with the changed field names
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, code: str, command: UpdatePlanCommand) -> Result[PlanResponse]:
        changes = command.model_dump(exclude_none=True)
        if "currency" in changes:
            changes["currency"] = str(changes["currency"]).strip().upper()

        error = validate_plan_fields(changes)
        if error:
            return Return.err(error)

        normalized = normalize_plan_code(code)

        async with self.uow:
            plan = await self.uow.plans.get_by_code(normalized)
            if plan is None:
                return Return.err(plan_not_found(normalized))

            if "tier_level" in changes and changes["tier_level"] != plan.tier_level:
                holder = await self.uow.plans.get_by_tier_level(changes["tier_level"])
                if holder is not None and holder.id != plan.id:
                    return Return.err(
                        Error(
                            ErrorCode.PLAN_ALREADY_EXISTS,
                            f"Tier level {changes['tier_level']} is already taken",
                            {"tier_level": changes["tier_level"]},
                        )
                    )

            for field, value in changes.items():
                setattr(plan, field, value)
            plan = await self.uow.plans.update(plan)

            await self.uow.audit_events.create(
                AuditEvent(
                    action="plan_updated",
                    event_metadata={"plan_code": normalized, "fields": sorted(changes)},
                )
            )

            await self.uow.commit()

            logger.info(f"Plan {normalized} updated: {sorted(changes)}")
            return Return.ok(PlanResponse.from_plan(plan))
