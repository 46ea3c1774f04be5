"""
Use Cases

Organized into domain folders:
- auth/: Clinic registration, email verification, login
- billing/: Provider checkout, confirmation, manual payments, history
- plans/: Plan catalog reads and administration
- subscriptions/: Subscription view, cancel, past due
- doctors/: Seat-consuming doctor operations

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterClinicUseCase,
    RegisterClinicCommand,
    RegisterClinicResponse,
    LoginUseCase,
    VerifyEmailUseCase,
    ResendVerificationUseCase,
)
from .billing import (
    CreateOrderUseCase,
    ConfirmPaymentUseCase,
    SubmitManualPaymentUseCase,
    ListPaymentsUseCase,
)
from .plans import (
    ListActivePlansUseCase,
    ListAllPlansUseCase,
    GetPlanUseCase,
    CreatePlanUseCase,
    UpdatePlanUseCase,
    ArchivePlanUseCase,
    SeedPlansUseCase,
)
from .subscriptions import (
    GetSubscriptionUseCase,
    CancelSubscriptionUseCase,
    MarkPastDueUseCase,
)
from .doctors import (
    AddDoctorUseCase,
    ArchiveDoctorUseCase,
)

__all__ = [
    # Auth
    "RegisterClinicUseCase",
    "RegisterClinicCommand",
    "RegisterClinicResponse",
    "LoginUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    # Billing
    "CreateOrderUseCase",
    "ConfirmPaymentUseCase",
    "SubmitManualPaymentUseCase",
    "ListPaymentsUseCase",
    # Plans
    "ListActivePlansUseCase",
    "ListAllPlansUseCase",
    "GetPlanUseCase",
    "CreatePlanUseCase",
    "UpdatePlanUseCase",
    "ArchivePlanUseCase",
    "SeedPlansUseCase",
    # Subscriptions
    "GetSubscriptionUseCase",
    "CancelSubscriptionUseCase",
    "MarkPastDueUseCase",
    # Doctors
    "AddDoctorUseCase",
    "ArchiveDoctorUseCase",
]
