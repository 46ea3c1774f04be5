"""
Domain Error Codes

Closed set of error codes returned by services and use cases, grouped by kind.
The API layer maps each kind to an HTTP status.
"""

from enum import Enum
from typing import Any, Optional

from libs.result import Error


class ErrorKind(str, Enum):
    """Error category, one per HTTP status family"""

    validation = "validation"
    unauthorized = "unauthorized"
    forbidden = "forbidden"
    not_found = "not_found"
    conflict = "conflict"
    state = "state"
    upstream = "upstream"


class ErrorCode:
    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_BILLING_CYCLE = "INVALID_BILLING_CYCLE"

    # Authentication / authorization
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_VERIFICATION_CODE = "INVALID_VERIFICATION_CODE"
    TENANT_CONTEXT_MISSING = "TENANT_CONTEXT_MISSING"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_API_KEY = "INVALID_API_KEY"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"
    PAYMENT_TENANT_MISMATCH = "PAYMENT_TENANT_MISMATCH"

    # Entitlements
    SUBSCRIPTION_INACTIVE = "SUBSCRIPTION_INACTIVE"
    SEAT_LIMIT_REACHED = "SEAT_LIMIT_REACHED"

    # Lookups
    TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
    PLAN_NOT_FOUND = "PLAN_NOT_FOUND"
    PAYMENT_RECORD_NOT_FOUND = "PAYMENT_RECORD_NOT_FOUND"
    DOCTOR_NOT_FOUND = "DOCTOR_NOT_FOUND"

    # Conflicts
    SIGNATURE_MISMATCH = "SIGNATURE_MISMATCH"
    DUPLICATE_IDEMPOTENCY_KEY = "DUPLICATE_IDEMPOTENCY_KEY"
    PAYMENT_NOT_CONFIRMABLE = "PAYMENT_NOT_CONFIRMABLE"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    REGISTRATION_ID_IN_USE = "REGISTRATION_ID_IN_USE"
    PLAN_ALREADY_EXISTS = "PLAN_ALREADY_EXISTS"

    # Subscription state
    INVALID_TRANSITION = "INVALID_TRANSITION"

    # Payment provider
    ORDER_CREATION_FAILED = "ORDER_CREATION_FAILED"
    CONFIRMATION_TIMEOUT = "CONFIRMATION_TIMEOUT"


ERROR_KINDS = {
    ErrorCode.VALIDATION_ERROR: ErrorKind.validation,
    ErrorCode.INVALID_BILLING_CYCLE: ErrorKind.validation,
    ErrorCode.INVALID_CREDENTIALS: ErrorKind.unauthorized,
    ErrorCode.INVALID_VERIFICATION_CODE: ErrorKind.unauthorized,
    ErrorCode.TENANT_CONTEXT_MISSING: ErrorKind.unauthorized,
    ErrorCode.UNAUTHORIZED: ErrorKind.unauthorized,
    ErrorCode.INVALID_API_KEY: ErrorKind.unauthorized,
    ErrorCode.INSUFFICIENT_ROLE: ErrorKind.forbidden,
    ErrorCode.PAYMENT_TENANT_MISMATCH: ErrorKind.forbidden,
    ErrorCode.SUBSCRIPTION_INACTIVE: ErrorKind.forbidden,
    ErrorCode.SEAT_LIMIT_REACHED: ErrorKind.forbidden,
    ErrorCode.TENANT_NOT_FOUND: ErrorKind.not_found,
    ErrorCode.PLAN_NOT_FOUND: ErrorKind.not_found,
    ErrorCode.PAYMENT_RECORD_NOT_FOUND: ErrorKind.not_found,
    ErrorCode.DOCTOR_NOT_FOUND: ErrorKind.not_found,
    ErrorCode.SIGNATURE_MISMATCH: ErrorKind.conflict,
    ErrorCode.DUPLICATE_IDEMPOTENCY_KEY: ErrorKind.conflict,
    ErrorCode.PAYMENT_NOT_CONFIRMABLE: ErrorKind.conflict,
    ErrorCode.EMAIL_ALREADY_EXISTS: ErrorKind.conflict,
    ErrorCode.REGISTRATION_ID_IN_USE: ErrorKind.conflict,
    ErrorCode.PLAN_ALREADY_EXISTS: ErrorKind.conflict,
    ErrorCode.INVALID_TRANSITION: ErrorKind.state,
    ErrorCode.ORDER_CREATION_FAILED: ErrorKind.upstream,
    ErrorCode.CONFIRMATION_TIMEOUT: ErrorKind.upstream,
}


def kind_of(code: str) -> Optional[ErrorKind]:
    """Kind for a known code, None for anything outside the closed set"""
    return ERROR_KINDS.get(code)


def tenant_not_found() -> Error:
    return Error(ErrorCode.TENANT_NOT_FOUND, "Tenant not found")


def plan_not_found(plan_code: Any) -> Error:
    return Error(
        ErrorCode.PLAN_NOT_FOUND,
        f'Plan "{plan_code}" not found or inactive',
        {"plan_code": plan_code},
    )
