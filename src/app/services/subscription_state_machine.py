"""
Subscription State Machine

Sole owner of a tenant's subscription fields.

    PENDING_VERIFICATION --mark_verified--> PENDING_PAYMENT
    PENDING_PAYMENT | PAST_DUE | CANCELED --activate--> ACTIVE
    ACTIVE --activate (new payment)--> ACTIVE
    ACTIVE --mark_past_due--> PAST_DUE
    any --cancel--> CANCELED

Methods run inside the caller's UnitOfWork and never commit.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.dtos import SubscriptionState
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, BillingCycle, SubscriptionStatus, Tenant
from src.domain.errors import ErrorCode, tenant_not_found

logger = logging.getLogger(__name__)

ACTIVATABLE_FROM = frozenset(
    {
        SubscriptionStatus.PENDING_PAYMENT,
        SubscriptionStatus.PAST_DUE,
        SubscriptionStatus.CANCELED,
        SubscriptionStatus.ACTIVE,
    }
)


def _state(tenant: Tenant, changed: bool) -> SubscriptionState:
    return SubscriptionState(
        tenant_id=str(tenant.id),
        status=tenant.subscription_status,
        plan_code=tenant.subscription_plan_code,
        billing_cycle=tenant.subscription_billing_cycle,
        activated_at=tenant.subscription_activated_at,
        changed=changed,
    )


def _invalid_transition(tenant: Tenant, operation: str) -> Error:
    current = SubscriptionStatus(tenant.subscription_status).value
    return Error(
        ErrorCode.INVALID_TRANSITION,
        f"Cannot {operation} a subscription in state {current}",
        {"status": current, "operation": operation},
    )


class SubscriptionStateMachine:
    """
    Legal transitions of Tenant.subscription_status.

    Business Rules:
    - mark_verified repeated after verification is a no-op success
    - activate is idempotent per payment record id
    - A CANCELED subscription comes back only through a new payment
    - Every real transition writes one audit event
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Callable[[], datetime]] = None):
        self.uow = uow
        self._clock = clock or datetime.utcnow

    async def mark_verified(self, tenant_id: UUID) -> Result[SubscriptionState]:
        """PENDING_VERIFICATION -> PENDING_PAYMENT"""
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        if tenant.subscription_status != SubscriptionStatus.PENDING_VERIFICATION:
            # Already past verification
            return Return.ok(_state(tenant, changed=False))

        return Return.ok(
            await self._transition(
                tenant, SubscriptionStatus.PENDING_PAYMENT, "subscription_pending_payment"
            )
        )

    async def activate(
        self,
        tenant_id: UUID,
        plan_code: str,
        billing_cycle: BillingCycle,
        payment_record_id: UUID,
        provider_order_id: Optional[str] = None,
        provider_payment_id: Optional[str] = None,
    ) -> Result[SubscriptionState]:
        """
        Activate the subscription for a completed payment.

        Args:
            tenant_id: Tenant being activated
            plan_code: Plan purchased
            billing_cycle: Cycle purchased
            payment_record_id: COMPLETED PaymentRecord backing the activation
            provider_order_id: Provider order reference, if any
            provider_payment_id: Provider payment reference, if any

        Returns:
            Result[SubscriptionState]; a repeat call for the same payment
            record returns the current ACTIVE state with changed=False
        """
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        if (
            tenant.subscription_status == SubscriptionStatus.ACTIVE
            and tenant.subscription_activation_payment_id == payment_record_id
        ):
            return Return.ok(_state(tenant, changed=False))

        if tenant.subscription_status not in ACTIVATABLE_FROM:
            return Return.err(_invalid_transition(tenant, "activate"))

        previous = SubscriptionStatus(tenant.subscription_status)
        tenant.subscription_plan_code = plan_code
        tenant.subscription_billing_cycle = BillingCycle(billing_cycle)
        tenant.subscription_provider_order_id = provider_order_id
        tenant.subscription_provider_payment_id = provider_payment_id
        tenant.subscription_activation_payment_id = payment_record_id
        tenant.subscription_activated_at = self._clock()
        tenant.subscription_canceled_at = None

        state = await self._transition(
            tenant,
            SubscriptionStatus.ACTIVE,
            "subscription_activated",
            {
                "plan_code": plan_code,
                "billing_cycle": BillingCycle(billing_cycle).value,
                "payment_id": str(payment_record_id),
                "previous_status": previous.value,
            },
        )
        return Return.ok(state)

    async def mark_past_due(self, tenant_id: UUID) -> Result[SubscriptionState]:
        """ACTIVE -> PAST_DUE"""
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        if tenant.subscription_status == SubscriptionStatus.PAST_DUE:
            return Return.ok(_state(tenant, changed=False))
        if tenant.subscription_status != SubscriptionStatus.ACTIVE:
            return Return.err(_invalid_transition(tenant, "mark past due"))

        return Return.ok(
            await self._transition(tenant, SubscriptionStatus.PAST_DUE, "subscription_past_due")
        )

    async def cancel(self, tenant_id: UUID, user_id: Optional[UUID] = None) -> Result[SubscriptionState]:
        """Any state -> CANCELED"""
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        if tenant.subscription_status == SubscriptionStatus.CANCELED:
            return Return.ok(_state(tenant, changed=False))

        tenant.subscription_canceled_at = self._clock()
        return Return.ok(
            await self._transition(
                tenant, SubscriptionStatus.CANCELED, "subscription_canceled", user_id=user_id
            )
        )

    async def _transition(
        self,
        tenant: Tenant,
        target: SubscriptionStatus,
        action: str,
        metadata: Optional[dict] = None,
        user_id: Optional[UUID] = None,
    ) -> SubscriptionState:
        previous = SubscriptionStatus(tenant.subscription_status)
        tenant.subscription_status = target
        await self.uow.tenants.update(tenant)

        event_metadata = {"from": previous.value, "to": target.value}
        event_metadata.update(metadata or {})
        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=tenant.id,
                user_id=user_id,
                action=action,
                event_metadata=event_metadata,
            )
        )

        logger.info(f"Tenant {tenant.id} subscription {previous.value} -> {target.value}")
        return _state(tenant, changed=True)
