"""
Mark Past Due Use Case

Billing integration endpoint: flags an ACTIVE subscription whose renewal
was not paid. Renewal scheduling itself lives outside this service.
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.dtos import SubscriptionState
from src.app.services.subscription_state_machine import SubscriptionStateMachine
from src.app.services.unit_of_work import UnitOfWork


class MarkPastDueUseCase:
    """ACTIVE -> PAST_DUE; idempotent when already PAST_DUE"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[SubscriptionState]:
        async with self.uow:
            result = await SubscriptionStateMachine(self.uow).mark_past_due(tenant_id)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()
            return Return.ok(result.value)
