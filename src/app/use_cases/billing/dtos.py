"""
Billing Use Case DTOs (Data Transfer Objects)

Commands and responses for checkout, confirmation, manual payments
and billing history.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.services.dtos import PaymentSummary
from src.domain.entities import BillingCycle, SubscriptionStatus


# ============================================================================
# Command DTOs
# ============================================================================


class CreateOrderCommand(BaseModel):
    """Start a provider checkout for a plan"""

    tenant_id: UUID
    user_id: Optional[UUID] = None
    email: Optional[str] = None
    plan_code: str
    billing_cycle: str = "monthly"
    amount_minor_units: Optional[int] = None  # Informational; catalog price wins
    currency: Optional[str] = None


class ConfirmPaymentCommand(BaseModel):
    """Provider callback data relayed by the client after checkout"""

    tenant_id: Optional[UUID] = None
    provider_order_id: str
    provider_payment_id: str
    provider_signature: str


class SubmitManualPaymentCommand(BaseModel):
    """Offline payment reference awaiting approval"""

    tenant_id: UUID
    user_id: Optional[UUID] = None
    email: Optional[str] = None
    plan_code: str
    billing_cycle: str = "monthly"
    transaction_ref: str
    submitted_amount_minor_units: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class CreateOrderResponse(BaseModel):
    """Everything the client needs to open provider checkout"""

    payment_id: str
    provider_order_id: str
    amount_minor_units: int
    currency: str
    plan_code: str
    billing_cycle: BillingCycle
    key_id: str


class ConfirmPaymentResponse(BaseModel):
    """Outcome of a confirmed provider payment"""

    payment_id: str
    tenant_id: str
    status: SubscriptionStatus
    plan_code: str
    billing_cycle: BillingCycle
    already_processed: bool


class ListPaymentsResponse(BaseModel):
    """Tenant billing history"""

    payments: List[PaymentSummary]
    count: int
