"""
Verify Email Use Case

Confirms the clinic owner's email with the 6-digit code issued at
registration and moves the clinic on to the payment step.
"""

import logging
import secrets
from datetime import datetime

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.subscription_state_machine import SubscriptionStateMachine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, User
from src.domain.errors import ErrorCode
from .dtos import VerifyEmailResponse

logger = logging.getLogger(__name__)


def _invalid_code() -> Error:
    return Error(ErrorCode.INVALID_VERIFICATION_CODE, "Invalid or expired verification code")


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Code must match the user's verification_code (constant-time compare)
    - Code must not be expired (10 minutes from issue)
    - Sets email_verified = True and clears the code (single-use)
    - Clinic subscription moves PENDING_VERIFICATION -> PENDING_PAYMENT
    - Already verified users get success without a token (log in instead)
    - Records audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, code: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            email: Owner email address
            code: 6-digit verification code

        Returns:
            Result with verification status and access token, or Error

        Errors:
            - INVALID_VERIFICATION_CODE: Unknown email, wrong or expired code
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.strip().lower())
            if user is None:
                return Return.err(_invalid_code())

            state_machine = SubscriptionStateMachine(self.uow)

            if user.email_verified:
                # Idempotent; also completes a transition a prior attempt missed
                subscription_status = None
                if user.tenant_id:
                    state = await state_machine.mark_verified(user.tenant_id)
                    if state.is_ok():
                        subscription_status = state.value.status
                await self.uow.commit()
                return Return.ok(
                    VerifyEmailResponse(
                        status="verified",
                        message="Email is already verified. Please log in.",
                        subscription_status=subscription_status,
                    )
                )

            if not user.verification_code or user.verification_expires_at is None:
                return Return.err(_invalid_code())

            if not secrets.compare_digest(user.verification_code, str(code).strip()):
                logger.warning(f"Wrong verification code for user {user.id}")
                return Return.err(_invalid_code())

            if datetime.utcnow() > user.verification_expires_at:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_VERIFICATION_CODE,
                        "Verification code has expired. Please request a new one.",
                    )
                )

            user.email_verified = True
            user.verification_code = None
            user.verification_expires_at = None
            await self.uow.users.update(user)

            subscription_status = None
            if user.tenant_id:
                state = await state_machine.mark_verified(user.tenant_id)
                if state.is_err():
                    return Return.err(state.error)
                subscription_status = state.value.status

            audit = AuditEvent(
                tenant_id=user.tenant_id,
                user_id=user.id,
                action="email_verified",
                event_metadata={"email": user.email},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Email verified for user {user.id}")

            return Return.ok(
                VerifyEmailResponse(
                    status="verified",
                    message="Email successfully verified",
                    access_token=self._token(user),
                    subscription_status=subscription_status,
                )
            )

    @staticmethod
    def _token(user: User) -> str:
        return generate_jwt(user.id, user.tenant_id, user.role.value)
