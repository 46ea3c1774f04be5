"""
Authentication Use Cases

Clinic onboarding and authentication business logic.
"""

from .register_clinic_use_case import RegisterClinicUseCase
from .login_use_case import LoginUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .dtos import (
    ClinicDetails,
    LoginResponse,
    OwnerDetails,
    RegisterClinicCommand,
    RegisterClinicResponse,
    ResendVerificationResponse,
    TenantCreated,
    UserInfo,
    VerifyEmailResponse,
)

__all__ = [
    # Use Cases
    "RegisterClinicUseCase",
    "LoginUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    # DTOs - Commands
    "RegisterClinicCommand",
    "OwnerDetails",
    "ClinicDetails",
    # DTOs - Responses
    "RegisterClinicResponse",
    "VerifyEmailResponse",
    "ResendVerificationResponse",
    "LoginResponse",
    # DTOs - Nested Models
    "UserInfo",
    "TenantCreated",
]
