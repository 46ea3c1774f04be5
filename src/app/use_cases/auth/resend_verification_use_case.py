"""
Resend Verification Code Use Case

Issues a fresh 6-digit verification code to an unverified owner.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResendVerificationResponse
from .verification import generate_verification_code, verification_expiry

SENT_MESSAGE = "If the email exists, a verification code has been sent"


class ResendVerificationUseCase:
    """
    Use case for resending the email verification code.

    Business Rules:
    - If email is not verified, generate new code and reset expiry
    - If email is already verified, return success (nothing sent)
    - New code replaces old code (invalidates previous)
    - Returns same response for valid/invalid emails (no enumeration)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[ResendVerificationResponse]:
        """
        Execute resend verification use case.

        Args:
            email: User's email address

        Returns:
            Result with resend status; never an error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.strip().lower())

            if user is None:
                return Return.ok(ResendVerificationResponse(status="sent", message=SENT_MESSAGE))

            if user.email_verified:
                return Return.ok(
                    ResendVerificationResponse(
                        status="already_verified", message="Email is already verified"
                    )
                )

            user.verification_code = generate_verification_code()
            user.verification_expires_at = verification_expiry()
            await self.uow.users.update(user)

            await self.uow.commit()

            # Delivery of the code happens outside this service
            return Return.ok(ResendVerificationResponse(status="sent", message=SENT_MESSAGE))
