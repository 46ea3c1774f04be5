from uuid import UUID

from libs.result import Result, Return
from src.app.services.plan_catalog import PlanCatalog, is_unlimited
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import tenant_not_found
from .dtos import SubscriptionView


class GetSubscriptionUseCase:
    """
    Read the tenant's subscription and seat usage.

    Seats are counted on every call; nothing here is cached.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[SubscriptionView]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(tenant_not_found())

            catalog = PlanCatalog(self.uow)
            plan_result = await catalog.get_active_plan(tenant.subscription_plan_code)
            seat_limit = None
            if plan_result.is_ok():
                seat_limit = catalog.seat_limit(plan_result.value)

            seats_used = await self.uow.doctors.count_active_seats(tenant_id)

            return Return.ok(
                SubscriptionView(
                    tenant_id=str(tenant.id),
                    tenant_name=tenant.name,
                    status=tenant.subscription_status,
                    plan_code=tenant.subscription_plan_code,
                    billing_cycle=tenant.subscription_billing_cycle,
                    activated_at=tenant.subscription_activated_at,
                    canceled_at=tenant.subscription_canceled_at,
                    seats_used=seats_used,
                    seat_limit=seat_limit,
                    unlimited=seat_limit is not None and is_unlimited(seat_limit),
                )
            )
