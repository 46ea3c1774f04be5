"""
PaymentRecord Entity

Append-only ledger of payment attempts.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import BillingCycle, PaymentMethod, PaymentPurpose, PaymentStatus


class PaymentRecord(SQLModel, table=True):
    """
    PaymentRecord entity - one attempted or completed payment.

    Business Rules:
    - Never deleted; status moves PENDING -> COMPLETED | FAILED (| REFUNDED)
    - amount_minor_units is the catalog price, never the caller's figure
    - provider_order_id / provider_payment_id are unique idempotency keys
    - Provider fields are set only for PROVIDER, transaction_ref only for MANUAL
    """

    __tablename__ = "payment_records"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(nullable=False, index=True)
    user_id: Optional[UUID] = Field(default=None, index=True)
    email: Optional[str] = Field(default=None, max_length=255)

    amount_minor_units: int = Field(ge=1)
    currency: str = Field(default="INR", max_length=3)
    purpose: PaymentPurpose = Field(default=PaymentPurpose.SUBSCRIPTION)
    plan_code: str = Field(max_length=50, index=True)
    billing_cycle: BillingCycle = Field(default=BillingCycle.monthly)

    method: PaymentMethod = Field(nullable=False)
    status: PaymentStatus = Field(default=PaymentStatus.PENDING)

    # Provider payments
    provider_order_id: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=100
    )
    provider_payment_id: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=100
    )
    provider_signature: Optional[str] = Field(default=None, max_length=256)

    # Manual payments
    transaction_ref: Optional[str] = Field(default=None, max_length=255)
    submitted_amount_minor_units: Optional[int] = Field(default=None)

    failure_reason: Optional[str] = Field(default=None, max_length=100)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_payment_tenant_created", "tenant_id", "created_at"),
        Index("idx_payment_tenant_status", "tenant_id", "status"),
    )
