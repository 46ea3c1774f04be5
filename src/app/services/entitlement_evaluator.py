"""
Entitlement Evaluator

Answers "may this tenant add one more doctor?" without writing anything.

The check does not reserve a seat. Callers run it immediately before the
doctor insert; two concurrent inserts can both pass and overshoot the limit
by one. That soft limit is the accepted behaviour.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.dtos import SeatCheck
from src.app.services.plan_catalog import PlanCatalog, is_unlimited
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SubscriptionStatus
from src.domain.errors import ErrorCode, tenant_not_found

logger = logging.getLogger(__name__)


class EntitlementEvaluator:
    """
    Read-only capability checks against a tenant's plan.

    Business Rules:
    - Subscription must be ACTIVE, whatever the seat count
    - Plan must exist and be active in the catalog
    - Unlimited plans skip the seat count entirely
    - Otherwise allowed iff non-archived doctors < plan limit
    """

    def __init__(self, uow: UnitOfWork, catalog: PlanCatalog = None):
        self.uow = uow
        self.catalog = catalog or PlanCatalog(uow)

    async def assert_can_add_doctor(self, tenant_id: UUID) -> Result[SeatCheck]:
        """
        Check that one more doctor seat is available.

        Args:
            tenant_id: Tenant adding the doctor

        Returns:
            Result[SeatCheck], or Error
            (TENANT_NOT_FOUND, SUBSCRIPTION_INACTIVE, PLAN_NOT_FOUND, SEAT_LIMIT_REACHED)
        """
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        if tenant.subscription_status != SubscriptionStatus.ACTIVE:
            return Return.err(
                Error(
                    ErrorCode.SUBSCRIPTION_INACTIVE,
                    "Subscription inactive. Complete payment to add doctors.",
                    {"status": SubscriptionStatus(tenant.subscription_status).value},
                )
            )

        plan_result = await self.catalog.get_active_plan(tenant.subscription_plan_code)
        if plan_result.is_err():
            return Return.err(plan_result.error)
        plan = plan_result.value

        limit = self.catalog.seat_limit(plan)
        if is_unlimited(limit):
            return Return.ok(SeatCheck(plan_code=plan.code, limit=limit, unlimited=True))

        seats_used = await self.uow.doctors.count_active_seats(tenant_id)
        if seats_used >= limit:
            logger.info(
                f"Seat limit reached for tenant {tenant_id}: {seats_used}/{limit} on {plan.code}"
            )
            return Return.err(
                Error(
                    ErrorCode.SEAT_LIMIT_REACHED,
                    f"Doctor limit reached for {plan.code}. Max allowed: {limit}.",
                    {"plan_code": plan.code, "limit": limit},
                )
            )

        return Return.ok(SeatCheck(plan_code=plan.code, limit=limit, seats_used=seats_used))
