"""
Clinic Billing Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    BillingCycle,
    PaymentMethod,
    PaymentPurpose,
    PaymentStatus,
    SubscriptionStatus,
    UserRole,
)

# Export all entities
from .user import User
from .tenant import Tenant
from .plan import Plan, UNLIMITED
from .payment_record import PaymentRecord
from .doctor import Doctor
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "BillingCycle",
    "PaymentMethod",
    "PaymentPurpose",
    "PaymentStatus",
    "SubscriptionStatus",
    "UserRole",
    # Entities
    "User",
    "Tenant",
    "Plan",
    "UNLIMITED",
    "PaymentRecord",
    "Doctor",
    "AuditEvent",
]
