"""
Clinic Billing Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SubscriptionStatus(str, Enum):
    """Tenant subscription lifecycle state"""

    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    PENDING_PAYMENT = "PENDING_PAYMENT"
    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    CANCELED = "CANCELED"


class BillingCycle(str, Enum):
    """Billing period a plan price applies to"""

    monthly = "monthly"
    yearly = "yearly"


class PaymentMethod(str, Enum):
    """How a payment reaches the platform"""

    PROVIDER = "PROVIDER"
    MANUAL = "MANUAL"


class PaymentStatus(str, Enum):
    """Payment record status"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentPurpose(str, Enum):
    """What a payment is for"""

    SUBSCRIPTION = "SUBSCRIPTION"


class UserRole(str, Enum):
    """Platform role of a user"""

    SUPER_ADMIN = "SUPER_ADMIN"
    CLINIC_ADMIN = "CLINIC_ADMIN"
    PATIENT = "PATIENT"
