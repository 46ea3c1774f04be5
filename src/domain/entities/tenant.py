"""
Tenant Entity

A clinic account: the billing and isolation unit of the platform.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import BillingCycle, SubscriptionStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - a clinic and its subscription.

    Business Rules:
    - registration_id is unique (stored upper-cased)
    - Created together with its owning user in one transaction
    - subscription_* fields are written only by SubscriptionStateMachine
    - subscription_activation_payment_id makes activation idempotent
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    registration_id: str = Field(unique=True, index=True, max_length=100)
    slug: str = Field(unique=True, index=True, max_length=300)
    address: str = Field(max_length=500)

    owner_id: Optional[UUID] = Field(default=None, index=True)

    # Subscription sub-record
    subscription_plan_code: str = Field(default="PRO", max_length=50)
    subscription_billing_cycle: Optional[BillingCycle] = Field(default=None)
    subscription_status: SubscriptionStatus = Field(
        default=SubscriptionStatus.PENDING_VERIFICATION
    )
    subscription_provider_order_id: Optional[str] = Field(default=None, max_length=100)
    subscription_provider_payment_id: Optional[str] = Field(default=None, max_length=100)
    subscription_activation_payment_id: Optional[UUID] = Field(default=None)
    subscription_activated_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    subscription_canceled_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_tenant_subscription_status", "subscription_status"),)
