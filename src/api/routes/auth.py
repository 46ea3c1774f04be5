from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import to_http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ClinicDetails,
    LoginResponse,
    LoginUseCase,
    OwnerDetails,
    RegisterClinicCommand,
    RegisterClinicResponse,
    RegisterClinicUseCase,
    ResendVerificationResponse,
    ResendVerificationUseCase,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class OwnerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Owner full name")
    email: EmailStr = Field(..., description="Owner email address")
    password: str = Field(..., min_length=8, description="Owner password (min 8 chars)")
    phone: Optional[str] = Field(None, max_length=30)


class ClinicRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Clinic name")
    registration_id: str = Field(
        ..., min_length=1, max_length=100, description="Medical registration ID"
    )
    address: str = Field(..., min_length=1, max_length=500)


class RegisterRequest(BaseModel):
    """
    Register clinic HTTP request payload

    Validates incoming HTTP request before converting to RegisterClinicCommand.
    """

    owner: OwnerRequest
    clinic: ClinicRequest
    plan_code: Optional[str] = Field(None, description="Requested plan, defaults to PRO")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterClinicResponse
)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Register Clinic

    Creates the clinic admin account and the clinic in one transaction.
    The clinic starts in PENDING_VERIFICATION; a 6-digit code is issued
    for email verification.

    Raises:
        - 400 Bad Request: Invalid input
        - 409 Conflict: EMAIL_ALREADY_EXISTS, REGISTRATION_ID_IN_USE
    """
    command = RegisterClinicCommand(
        owner=OwnerDetails(**request.owner.model_dump()),
        clinic=ClinicDetails(**request.clinic.model_dump()),
        plan_code=request.plan_code,
    )

    result = await RegisterClinicUseCase(uow).execute(command)
    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class VerifyEmailRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6, description="6-digit verification code")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse)
async def verify_email(request: VerifyEmailRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Verify Email

    Marks the owner's email verified and moves the clinic to PENDING_PAYMENT.

    Raises:
        - 401 Unauthorized: INVALID_VERIFICATION_CODE
    """
    result = await VerifyEmailUseCase(uow).execute(request.email, request.code)
    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class ResendVerificationRequest(BaseModel):
    email: EmailStr


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
)
async def resend_verification(
    request: ResendVerificationRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Resend Verification Code

    Always succeeds so callers cannot tell which emails are registered.
    """
    result = await ResendVerificationUseCase(uow).execute(request.email)
    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Login

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
    """
    result = await LoginUseCase(uow).execute(request.email, request.password)
    if result.is_err():
        raise to_http_error(result.error)

    return result.value
