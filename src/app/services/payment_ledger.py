"""
Payment Ledger

Append-only record of payment attempts. Reconciles provider confirmations
exactly once and drives SubscriptionStateMachine on confirmed payment.

Methods run inside the caller's UnitOfWork and never commit, so the ledger
write and the subscription activation land in one transaction.
"""

import asyncio
import logging
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.dtos import (
    ManualPaymentReceipt,
    PaymentConfirmation,
    PaymentSummary,
    ProviderCheckout,
)
from src.app.services.payment_gateway import (
    PaymentGateway,
    PaymentGatewayError,
    PaymentGatewayTimeout,
    ProviderOrder,
)
from src.app.services.plan_catalog import PlanCatalog
from src.app.services.subscription_state_machine import SubscriptionStateMachine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    BillingCycle,
    PaymentMethod,
    PaymentRecord,
    PaymentStatus,
    SubscriptionStatus,
)
from src.domain.errors import ErrorCode, tenant_not_found

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20
MAX_HISTORY_LIMIT = 100

PAYMENT_NOT_VERIFIED_MESSAGE = "Payment could not be verified"


def clamp_history_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_HISTORY_LIMIT
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return DEFAULT_HISTORY_LIMIT
    return min(max(limit, 1), MAX_HISTORY_LIMIT)


def _summary(record: PaymentRecord) -> PaymentSummary:
    return PaymentSummary(
        payment_id=str(record.id),
        amount_minor_units=record.amount_minor_units,
        currency=record.currency,
        plan_code=record.plan_code,
        billing_cycle=record.billing_cycle,
        method=record.method,
        status=record.status,
        provider_order_id=record.provider_order_id,
        transaction_ref=record.transaction_ref,
        created_at=record.created_at,
    )


class PaymentLedger:
    """
    Records payments and reconciles provider confirmations.

    Business Rules:
    - Amounts always come from PlanCatalog, never from the caller
    - Provider order id and provider payment id are idempotency keys
    - Confirmation of a COMPLETED record is a no-op returning the same result
    - A signature mismatch marks the record FAILED and is never retried here
    - PENDING -> COMPLETED/FAILED only through conditional updates
    - Manual payments stay PENDING and never activate the subscription
    """

    def __init__(
        self,
        uow: UnitOfWork,
        gateway: Optional[PaymentGateway],
        catalog: PlanCatalog = None,
        state_machine: SubscriptionStateMachine = None,
        provider_timeout_seconds: float = 5.0,
    ):
        self.uow = uow
        self.gateway = gateway
        self.catalog = catalog or PlanCatalog(uow)
        self.state_machine = state_machine or SubscriptionStateMachine(uow)
        self.provider_timeout_seconds = provider_timeout_seconds

    async def begin_provider_payment(
        self,
        tenant_id: UUID,
        plan_code: str,
        billing_cycle: BillingCycle,
        user_id: Optional[UUID] = None,
        email: Optional[str] = None,
        requested_amount_minor_units: Optional[int] = None,
        requested_currency: Optional[str] = None,
    ) -> Result[ProviderCheckout]:
        """
        Create a provider order at the catalog price and record it PENDING.

        Args:
            tenant_id: Paying tenant
            plan_code: Plan being purchased
            billing_cycle: monthly or yearly
            user_id: Clinic admin initiating checkout
            email: Billing email
            requested_amount_minor_units: Ignored for pricing; logged if it differs
            requested_currency: Ignored; logged if it differs

        Returns:
            Result[ProviderCheckout], or Error
            (TENANT_NOT_FOUND, PLAN_NOT_FOUND, INVALID_TRANSITION,
            ORDER_CREATION_FAILED, DUPLICATE_IDEMPOTENCY_KEY)
        """
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        if tenant.subscription_status == SubscriptionStatus.PENDING_VERIFICATION:
            return Return.err(
                Error(
                    ErrorCode.INVALID_TRANSITION,
                    "Verify the clinic email before starting payment",
                    {"status": SubscriptionStatus.PENDING_VERIFICATION.value},
                )
            )

        plan_result = await self.catalog.get_active_plan(plan_code)
        if plan_result.is_err():
            return Return.err(plan_result.error)
        plan = plan_result.value

        cycle = BillingCycle(billing_cycle)
        amount = self.catalog.price_for(plan, cycle)
        if (
            requested_amount_minor_units is not None
            and requested_amount_minor_units != amount
        ):
            logger.warning(
                f"Ignoring client amount {requested_amount_minor_units} for tenant {tenant_id}; "
                f"catalog price for {plan.code}/{cycle.value} is {amount}"
            )
        if requested_currency and requested_currency.upper() != plan.currency:
            logger.warning(
                f"Ignoring client currency {requested_currency} for tenant {tenant_id}; "
                f"plan {plan.code} is priced in {plan.currency}"
            )

        order_result = await self._create_order(tenant_id, plan.code, cycle, amount, plan.currency)
        if order_result.is_err():
            return Return.err(order_result.error)
        order = order_result.value

        existing = await self.uow.payments.get_by_provider_order_id(order.provider_order_id)
        if existing is not None:
            logger.error(
                f"Provider returned order id {order.provider_order_id} already in the ledger"
            )
            return Return.err(
                Error(
                    ErrorCode.DUPLICATE_IDEMPOTENCY_KEY,
                    "Payment order already recorded",
                    {"provider_order_id": order.provider_order_id},
                )
            )

        record = await self.uow.payments.create(
            PaymentRecord(
                tenant_id=tenant_id,
                user_id=user_id,
                email=email,
                amount_minor_units=amount,
                currency=plan.currency,
                plan_code=plan.code,
                billing_cycle=cycle,
                method=PaymentMethod.PROVIDER,
                status=PaymentStatus.PENDING,
                provider_order_id=order.provider_order_id,
            )
        )

        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=tenant_id,
                user_id=user_id,
                action="payment_initiated",
                event_metadata={
                    "payment_id": str(record.id),
                    "provider_order_id": order.provider_order_id,
                    "plan_code": plan.code,
                    "billing_cycle": cycle.value,
                    "amount_minor_units": amount,
                },
            )
        )

        logger.info(
            f"Provider order {order.provider_order_id} created for tenant {tenant_id} "
            f"({plan.code}/{cycle.value}, {amount} {plan.currency})"
        )

        return Return.ok(
            ProviderCheckout(
                payment_id=str(record.id),
                provider_order_id=order.provider_order_id,
                amount_minor_units=amount,
                currency=plan.currency,
                plan_code=plan.code,
                billing_cycle=cycle,
            )
        )

    async def confirm_provider_payment(
        self,
        provider_order_id: str,
        provider_payment_id: str,
        provider_signature: str,
        tenant_id: Optional[UUID] = None,
    ) -> Result[PaymentConfirmation]:
        """
        Reconcile a provider confirmation and activate the subscription.

        Safe to call any number of times with the same arguments: after the
        first success every call returns the same confirmation without
        re-verifying, and activation stays single.

        Args:
            provider_order_id: Order id from begin_provider_payment
            provider_payment_id: Payment id issued by the provider
            provider_signature: Provider signature over order and payment ids
            tenant_id: Confirming tenant; must own the record when given

        Returns:
            Result[PaymentConfirmation], or Error
            (PAYMENT_RECORD_NOT_FOUND, PAYMENT_TENANT_MISMATCH,
            DUPLICATE_IDEMPOTENCY_KEY, PAYMENT_NOT_CONFIRMABLE,
            SIGNATURE_MISMATCH, CONFIRMATION_TIMEOUT, INVALID_TRANSITION)
        """
        record = await self.uow.payments.get_by_provider_order_id(provider_order_id)
        if record is None:
            logger.warning(f"Confirmation for unknown provider order {provider_order_id}")
            return Return.err(
                Error(ErrorCode.PAYMENT_RECORD_NOT_FOUND, "Payment record not found")
            )

        if tenant_id is not None and record.tenant_id != tenant_id:
            logger.warning(
                f"Tenant {tenant_id} tried to confirm payment {record.id} "
                f"owned by tenant {record.tenant_id}"
            )
            return Return.err(
                Error(
                    ErrorCode.PAYMENT_TENANT_MISMATCH,
                    "Payment does not belong to this tenant",
                )
            )

        if record.status == PaymentStatus.COMPLETED:
            return await self._replay_completed(record, provider_payment_id)

        if record.status != PaymentStatus.PENDING:
            return Return.err(self._not_confirmable(record))

        verified = await self._verify_signature(
            provider_order_id, provider_payment_id, provider_signature
        )
        if verified.is_err():
            return Return.err(verified.error)

        if not verified.value:
            failed = await self.uow.payments.fail_if_pending(
                record.id, ErrorCode.SIGNATURE_MISMATCH
            )
            if not failed:
                # A concurrent confirmation settled the record first
                return await self._settled_elsewhere(record, provider_payment_id)
            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=record.tenant_id,
                    user_id=record.user_id,
                    action="payment_failed",
                    event_metadata={
                        "payment_id": str(record.id),
                        "provider_order_id": provider_order_id,
                        "reason": ErrorCode.SIGNATURE_MISMATCH,
                    },
                )
            )
            logger.error(
                f"Signature mismatch for provider order {provider_order_id} "
                f"(payment {record.id}, tenant {record.tenant_id})"
            )
            return Return.err(
                Error(ErrorCode.SIGNATURE_MISMATCH, PAYMENT_NOT_VERIFIED_MESSAGE)
            )

        other = await self.uow.payments.get_by_provider_payment_id(provider_payment_id)
        if other is not None and other.id != record.id:
            logger.error(
                f"Provider payment id {provider_payment_id} already attached to payment {other.id}"
            )
            return Return.err(self._duplicate_key(provider_payment_id))

        won = await self.uow.payments.complete_if_pending(
            record.id, provider_payment_id, provider_signature
        )
        if not won:
            # A concurrent confirmation got there first
            return await self._settled_elsewhere(record, provider_payment_id)

        activation = await self.state_machine.activate(
            record.tenant_id,
            record.plan_code,
            record.billing_cycle,
            record.id,
            provider_order_id=provider_order_id,
            provider_payment_id=provider_payment_id,
        )
        if activation.is_err():
            logger.error(
                f"Activation failed after payment {record.id} completed: {activation.error.code}"
            )
            return Return.err(activation.error)

        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=record.tenant_id,
                user_id=record.user_id,
                action="payment_completed",
                event_metadata={
                    "payment_id": str(record.id),
                    "provider_order_id": provider_order_id,
                    "provider_payment_id": provider_payment_id,
                    "amount_minor_units": record.amount_minor_units,
                    "plan_code": record.plan_code,
                },
            )
        )

        logger.info(f"Payment {record.id} completed; tenant {record.tenant_id} active")
        return Return.ok(
            self._confirmation(record, activation.value.status, already_processed=False)
        )

    async def submit_manual_payment(
        self,
        tenant_id: UUID,
        plan_code: str,
        billing_cycle: BillingCycle,
        transaction_ref: str,
        submitted_amount_minor_units: Optional[int] = None,
        user_id: Optional[UUID] = None,
        email: Optional[str] = None,
    ) -> Result[ManualPaymentReceipt]:
        """
        Record an offline payment for later administrative approval.

        The tenant's subscription is left as it is.

        Returns:
            Result[ManualPaymentReceipt], or Error
            (VALIDATION_ERROR, TENANT_NOT_FOUND, PLAN_NOT_FOUND)
        """
        reference = str(transaction_ref or "").strip()
        if not reference:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "Transaction reference is required")
            )

        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        plan_result = await self.catalog.get_active_plan(plan_code)
        if plan_result.is_err():
            return Return.err(plan_result.error)
        plan = plan_result.value

        cycle = BillingCycle(billing_cycle)
        amount = self.catalog.price_for(plan, cycle)

        record = await self.uow.payments.create(
            PaymentRecord(
                tenant_id=tenant_id,
                user_id=user_id,
                email=email,
                amount_minor_units=amount,
                currency=plan.currency,
                plan_code=plan.code,
                billing_cycle=cycle,
                method=PaymentMethod.MANUAL,
                status=PaymentStatus.PENDING,
                transaction_ref=reference,
                submitted_amount_minor_units=submitted_amount_minor_units,
            )
        )

        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=tenant_id,
                user_id=user_id,
                action="manual_payment_submitted",
                event_metadata={
                    "payment_id": str(record.id),
                    "plan_code": plan.code,
                    "billing_cycle": cycle.value,
                    "amount_minor_units": amount,
                    "transaction_ref": reference,
                },
            )
        )

        logger.info(f"Manual payment {record.id} submitted for tenant {tenant_id}")
        return Return.ok(
            ManualPaymentReceipt(
                payment_id=str(record.id),
                status=record.status,
                amount_minor_units=amount,
                currency=plan.currency,
                plan_code=plan.code,
                billing_cycle=cycle,
            )
        )

    async def list_payments(
        self, tenant_id: UUID, limit: Optional[int] = None
    ) -> List[PaymentSummary]:
        """Tenant billing history, newest first"""
        records = await self.uow.payments.list_by_tenant(tenant_id, clamp_history_limit(limit))
        return [_summary(record) for record in records]

    async def _create_order(
        self,
        tenant_id: UUID,
        plan_code: str,
        cycle: BillingCycle,
        amount: int,
        currency: str,
    ) -> Result[ProviderOrder]:
        receipt = f"rcpt_{tenant_id.hex[:12]}_{plan_code.lower()}_{cycle.value}"
        metadata = {
            "tenant_id": str(tenant_id),
            "plan_code": plan_code,
            "billing_cycle": cycle.value,
        }
        try:
            order = await asyncio.wait_for(
                self.gateway.create_order(amount, currency, receipt, metadata),
                timeout=self.provider_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Order creation timed out for tenant {tenant_id}")
            return Return.err(
                Error(ErrorCode.ORDER_CREATION_FAILED, "Payment provider timed out")
            )
        except PaymentGatewayError as exc:
            logger.warning(f"Order creation failed for tenant {tenant_id}: {exc}")
            return Return.err(
                Error(ErrorCode.ORDER_CREATION_FAILED, "Payment provider is unavailable")
            )
        return Return.ok(order)

    async def _verify_signature(
        self, order_id: str, payment_id: str, signature: str
    ) -> Result[bool]:
        try:
            verified = await asyncio.wait_for(
                self.gateway.verify_signature(order_id, payment_id, signature),
                timeout=self.provider_timeout_seconds,
            )
        except (asyncio.TimeoutError, PaymentGatewayTimeout):
            logger.warning(f"Signature verification timed out for order {order_id}")
            return Return.err(
                Error(ErrorCode.CONFIRMATION_TIMEOUT, "Payment confirmation timed out, retry")
            )
        except PaymentGatewayError as exc:
            logger.error(f"Signature verification failed for order {order_id}: {exc}")
            return Return.err(
                Error(ErrorCode.CONFIRMATION_TIMEOUT, "Payment provider is unavailable, retry")
            )
        return Return.ok(bool(verified))

    async def _replay_completed(
        self, record: PaymentRecord, provider_payment_id: str
    ) -> Result[PaymentConfirmation]:
        if record.provider_payment_id != provider_payment_id:
            logger.error(
                f"Completed payment {record.id} re-confirmed with a different "
                f"provider payment id"
            )
            return Return.err(self._duplicate_key(provider_payment_id))

        tenant = await self.uow.tenants.get_by_id(record.tenant_id)
        if tenant is None:
            return Return.err(tenant_not_found())

        status = SubscriptionStatus(tenant.subscription_status)
        if (
            status == SubscriptionStatus.PENDING_PAYMENT
            and tenant.subscription_activation_payment_id is None
        ):
            # Completed payment whose activation never landed
            activation = await self.state_machine.activate(
                record.tenant_id,
                record.plan_code,
                record.billing_cycle,
                record.id,
                provider_order_id=record.provider_order_id,
                provider_payment_id=record.provider_payment_id,
            )
            if activation.is_err():
                return Return.err(activation.error)
            logger.warning(f"Re-applied activation for completed payment {record.id}")
            status = activation.value.status

        return Return.ok(self._confirmation(record, status, already_processed=True))

    async def _settled_elsewhere(
        self, record: PaymentRecord, provider_payment_id: str
    ) -> Result[PaymentConfirmation]:
        current = await self.uow.payments.get_by_id(record.id)
        if current is not None and current.status == PaymentStatus.COMPLETED:
            return await self._replay_completed(current, provider_payment_id)
        return Return.err(self._not_confirmable(current or record))

    @staticmethod
    def _confirmation(
        record: PaymentRecord, status: SubscriptionStatus, already_processed: bool
    ) -> PaymentConfirmation:
        return PaymentConfirmation(
            payment_id=str(record.id),
            tenant_id=str(record.tenant_id),
            status=status,
            plan_code=record.plan_code,
            billing_cycle=record.billing_cycle,
            already_processed=already_processed,
        )

    @staticmethod
    def _duplicate_key(provider_payment_id: str) -> Error:
        return Error(
            ErrorCode.DUPLICATE_IDEMPOTENCY_KEY,
            PAYMENT_NOT_VERIFIED_MESSAGE,
            {"provider_payment_id": provider_payment_id},
        )

    @staticmethod
    def _not_confirmable(record: PaymentRecord) -> Error:
        status = PaymentStatus(record.status).value
        return Error(
            ErrorCode.PAYMENT_NOT_CONFIRMABLE,
            PAYMENT_NOT_VERIFIED_MESSAGE,
            {"payment_status": status},
        )
