"""Subscription Use Case DTOs"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import BillingCycle, SubscriptionStatus


class SubscriptionView(BaseModel):
    """Tenant subscription with current seat usage"""

    tenant_id: str
    tenant_name: str
    status: SubscriptionStatus
    plan_code: str
    billing_cycle: Optional[BillingCycle] = None
    activated_at: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    seats_used: int
    seat_limit: Optional[int] = None  # None when the plan is no longer in the catalog
    unlimited: bool = False
