"""
Payment API Routes

Checkout, confirmation and manual payments for the caller's clinic.
Requires a clinic admin JWT with tenant context.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import to_http_error
from src.app.services.dtos import ManualPaymentReceipt
from src.app.services.payment_gateway import PaymentGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.billing import (
    ConfirmPaymentCommand,
    ConfirmPaymentResponse,
    ConfirmPaymentUseCase,
    CreateOrderCommand,
    CreateOrderResponse,
    CreateOrderUseCase,
    ListPaymentsResponse,
    ListPaymentsUseCase,
    SubmitManualPaymentCommand,
    SubmitManualPaymentUseCase,
)
from src.depends import ClinicContext, get_clinic_context, get_payment_gateway, get_unit_of_work
from src.domain.errors import ErrorCode

router = APIRouter(prefix="/payments", tags=["Payments"])


class CreateOrderRequest(BaseModel):
    plan_code: str = Field(..., min_length=1, max_length=50)
    billing_cycle: str = Field("monthly", description="monthly or yearly")
    amount_minor_units: Optional[int] = Field(
        None, description="Ignored for pricing; the catalog price is charged"
    )
    currency: Optional[str] = Field(None, max_length=3)


@router.post("/orders", status_code=status.HTTP_201_CREATED, response_model=CreateOrderResponse)
async def create_order(
    request: CreateOrderRequest,
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Create Payment Order

    Opens a provider order for the plan at its catalog price.

    Raises:
        - 400 Bad Request: PLAN_NOT_FOUND, INVALID_BILLING_CYCLE
        - 409 Conflict: INVALID_TRANSITION (email not verified), DUPLICATE_IDEMPOTENCY_KEY
        - 502 Bad Gateway: ORDER_CREATION_FAILED
    """
    command = CreateOrderCommand(
        tenant_id=context.tenant_id,
        user_id=context.user_id,
        plan_code=request.plan_code,
        billing_cycle=request.billing_cycle,
        amount_minor_units=request.amount_minor_units,
        currency=request.currency,
    )
    result = await CreateOrderUseCase(uow, gateway).execute(command)
    if result.is_err():
        raise to_http_error(
            result.error, overrides={ErrorCode.PLAN_NOT_FOUND: status.HTTP_400_BAD_REQUEST}
        )
    return result.value


class ConfirmPaymentRequest(BaseModel):
    provider_order_id: str = Field(..., min_length=1, max_length=100)
    provider_payment_id: str = Field(..., min_length=1, max_length=100)
    provider_signature: str = Field(..., min_length=1, max_length=256)


@router.post("/confirm", status_code=status.HTTP_200_OK, response_model=ConfirmPaymentResponse)
async def confirm_payment(
    request: ConfirmPaymentRequest,
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Confirm Payment

    Verifies the provider signature and activates the subscription.
    Safe to retry: a repeated confirmation returns the same result.

    Raises:
        - 403 Forbidden: PAYMENT_TENANT_MISMATCH
        - 404 Not Found: PAYMENT_RECORD_NOT_FOUND
        - 409 Conflict: SIGNATURE_MISMATCH, DUPLICATE_IDEMPOTENCY_KEY, PAYMENT_NOT_CONFIRMABLE
        - 502 Bad Gateway: CONFIRMATION_TIMEOUT
    """
    command = ConfirmPaymentCommand(
        tenant_id=context.tenant_id,
        provider_order_id=request.provider_order_id,
        provider_payment_id=request.provider_payment_id,
        provider_signature=request.provider_signature,
    )
    result = await ConfirmPaymentUseCase(uow, gateway).execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


class ManualPaymentRequest(BaseModel):
    plan_code: str = Field(..., min_length=1, max_length=50)
    billing_cycle: str = Field("monthly", description="monthly or yearly")
    transaction_ref: str = Field(..., max_length=255, description="Bank/UPI reference")
    submitted_amount_minor_units: Optional[int] = Field(None, ge=0)


@router.post("/manual", status_code=status.HTTP_201_CREATED, response_model=ManualPaymentReceipt)
async def submit_manual_payment(
    request: ManualPaymentRequest,
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Submit Manual Payment

    Records an offline payment for admin approval. Does not activate the
    subscription.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (missing reference), INVALID_BILLING_CYCLE
        - 404 Not Found: PLAN_NOT_FOUND
    """
    command = SubmitManualPaymentCommand(
        tenant_id=context.tenant_id,
        user_id=context.user_id,
        plan_code=request.plan_code,
        billing_cycle=request.billing_cycle,
        transaction_ref=request.transaction_ref,
        submitted_amount_minor_units=request.submitted_amount_minor_units,
    )
    result = await SubmitManualPaymentUseCase(uow).execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=ListPaymentsResponse)
async def list_payments(
    limit: int = Query(20, description="Clamped to 1..100"),
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Billing history of the caller's clinic, newest first"""
    result = await ListPaymentsUseCase(uow).execute(context.tenant_id, limit)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
