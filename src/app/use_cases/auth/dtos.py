"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the clinic onboarding and auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import SubscriptionStatus


# ============================================================================
# Command DTOs
# ============================================================================


class OwnerDetails(BaseModel):
    """Clinic owner account to create"""

    name: str
    email: str
    password: str
    phone: Optional[str] = None


class ClinicDetails(BaseModel):
    """Clinic (tenant) to create"""

    name: str
    registration_id: str
    address: str


class RegisterClinicCommand(BaseModel):
    """
    Register clinic command - validated registration intent

    Created by API layer after request validation passes.
    """

    owner: OwnerDetails
    clinic: ClinicDetails
    plan_code: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User information in registration response"""

    id: str
    name: str
    email: str
    role: str
    email_verified: bool


class TenantCreated(BaseModel):
    """Tenant information in registration response"""

    id: str
    name: str
    slug: str
    registration_id: str
    plan_code: str
    subscription_status: SubscriptionStatus


class RegisterClinicResponse(BaseModel):
    """
    Register clinic response

    The verification code is delivered out of band and never returned here.
    """

    user: UserInfo
    tenant: TenantCreated
    subscription_status: SubscriptionStatus


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    status: str
    message: str
    access_token: Optional[str] = None
    subscription_status: Optional[SubscriptionStatus] = None


class ResendVerificationResponse(BaseModel):
    """Response for resend verification email use case"""

    status: str
    message: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    token_type: str = "bearer"
    user_id: str
    tenant_id: Optional[str] = None
    role: str
    subscription_status: Optional[SubscriptionStatus] = None
