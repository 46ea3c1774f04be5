"""
Billing Use Cases

Provider checkout, payment confirmation, manual payments and history.
"""

from .create_order_use_case import CreateOrderUseCase
from .confirm_payment_use_case import ConfirmPaymentUseCase
from .submit_manual_payment_use_case import SubmitManualPaymentUseCase
from .list_payments_use_case import ListPaymentsUseCase
from .dtos import (
    ConfirmPaymentCommand,
    ConfirmPaymentResponse,
    CreateOrderCommand,
    CreateOrderResponse,
    ListPaymentsResponse,
    SubmitManualPaymentCommand,
)

__all__ = [
    # Use Cases
    "CreateOrderUseCase",
    "ConfirmPaymentUseCase",
    "SubmitManualPaymentUseCase",
    "ListPaymentsUseCase",
    # DTOs - Commands
    "CreateOrderCommand",
    "ConfirmPaymentCommand",
    "SubmitManualPaymentCommand",
    # DTOs - Responses
    "CreateOrderResponse",
    "ConfirmPaymentResponse",
    "ListPaymentsResponse",
]
