"""
Billing Service DTOs

Values returned by PlanCatalog, EntitlementEvaluator,
SubscriptionStateMachine and PaymentLedger.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import BillingCycle, PaymentMethod, PaymentStatus, SubscriptionStatus


class SeatCheck(BaseModel):
    """Outcome of a successful seat entitlement check"""

    plan_code: str
    limit: int
    seats_used: Optional[int] = None  # None when the plan is unlimited
    unlimited: bool = False


class SubscriptionState(BaseModel):
    """Tenant subscription after a state machine call"""

    tenant_id: str
    status: SubscriptionStatus
    plan_code: Optional[str] = None
    billing_cycle: Optional[BillingCycle] = None
    activated_at: Optional[datetime] = None
    changed: bool = True


class ProviderCheckout(BaseModel):
    """Pending provider payment ready for client-side checkout"""

    payment_id: str
    provider_order_id: str
    amount_minor_units: int
    currency: str
    plan_code: str
    billing_cycle: BillingCycle


class PaymentConfirmation(BaseModel):
    """Result of confirming a provider payment"""

    payment_id: str
    tenant_id: str
    status: SubscriptionStatus
    plan_code: str
    billing_cycle: BillingCycle
    already_processed: bool = False


class ManualPaymentReceipt(BaseModel):
    """Manual payment awaiting administrative approval"""

    payment_id: str
    status: PaymentStatus
    amount_minor_units: int
    currency: str
    plan_code: str
    billing_cycle: BillingCycle


class PaymentSummary(BaseModel):
    """One row of a tenant's billing history"""

    payment_id: str
    amount_minor_units: int
    currency: str
    plan_code: str
    billing_cycle: BillingCycle
    method: PaymentMethod
    status: PaymentStatus
    provider_order_id: Optional[str] = None
    transaction_ref: Optional[str] = None
    created_at: datetime
