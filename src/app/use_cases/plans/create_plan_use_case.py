"""
Create Plan Use Case

Adds a subscription tier to the catalog (platform admin only).
"""

import logging
import re

from libs.result import Error, Result, Return
from src.app.services.plan_catalog import normalize_plan_code, slugify
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Plan
from src.domain.errors import ErrorCode
from .dtos import CreatePlanCommand, PlanResponse
from .validation import validate_plan_fields

logger = logging.getLogger(__name__)

PLAN_CODE_PATTERN = re.compile(r"^[A-Z0-9_]{2,50}$")


class CreatePlanUseCase:
    """
    Use case for creating a plan.

    Business Rules:
    - Code is normalized to upper case and must be unique
    - Tier level must be unique
    - Prices are non-negative integers in minor units
    - Limits are -1 (unlimited) or >= 0
    - Records audit event plan_created
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreatePlanCommand) -> Result[PlanResponse]:
        """
        Execute create plan use case.

        Returns:
            Result[PlanResponse], or Error(VALIDATION_ERROR, PLAN_ALREADY_EXISTS)
        """
        code = normalize_plan_code(command.code)
        if not PLAN_CODE_PATTERN.match(code):
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_ERROR,
                    "Plan code must be 2-50 letters, digits or underscores",
                    {"field": "code"},
                )
            )

        fields = command.model_dump()
        fields["code"] = code
        fields["currency"] = str(command.currency).strip().upper()
        error = validate_plan_fields(fields)
        if error:
            return Return.err(error)

        async with self.uow:
            if await self.uow.plans.get_by_code(code):
                return Return.err(
                    Error(ErrorCode.PLAN_ALREADY_EXISTS, f"Plan {code} already exists")
                )
            if await self.uow.plans.get_by_tier_level(command.tier_level):
                return Return.err(
                    Error(
                        ErrorCode.PLAN_ALREADY_EXISTS,
                        f"Tier level {command.tier_level} is already taken",
                        {"tier_level": command.tier_level},
                    )
                )

            fields["name"] = fields["name"].strip()
            plan = await self.uow.plans.create(Plan(slug=slugify(code), **fields))

            await self.uow.audit_events.create(
                AuditEvent(
                    action="plan_created",
                    event_metadata={"plan_code": code, "tier_level": plan.tier_level},
                )
            )

            await self.uow.commit()

            logger.info(f"Plan {code} created at tier {plan.tier_level}")
            return Return.ok(PlanResponse.from_plan(plan))
