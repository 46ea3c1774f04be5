"""
Cancel Subscription Use Case

Used by the clinic admin (self-service) and by platform admins.
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.dtos import SubscriptionState
from src.app.services.subscription_state_machine import SubscriptionStateMachine
from src.app.services.unit_of_work import UnitOfWork


class CancelSubscriptionUseCase:
    """
    Cancel a tenant's subscription.

    Business Rules:
    - Allowed from any state; canceling twice is a no-op
    - Doctor additions are rejected until a new payment reactivates it
    - Existing doctors are kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, user_id: Optional[UUID] = None
    ) -> Result[SubscriptionState]:
        async with self.uow:
            result = await SubscriptionStateMachine(self.uow).cancel(tenant_id, user_id=user_id)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()
            return Return.ok(result.value)
