"""
Confirm Payment Use Case

Reconciles the provider's checkout callback and activates the subscription.
"""

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services.payment_gateway import PaymentGateway
from src.app.services.payment_ledger import PaymentLedger
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from .dtos import ConfirmPaymentCommand, ConfirmPaymentResponse


class ConfirmPaymentUseCase:
    """
    Use case for confirming a provider payment.

    Business Rules:
    - Payment record completion and subscription activation commit together
    - Retried confirmations return the original outcome, activating once
    - A signature mismatch is committed as FAILED before the error returns
    - Every other error rolls back
    """

    def __init__(
        self,
        uow: UnitOfWork,
        gateway: PaymentGateway,
        provider_timeout_seconds: float = None,
    ):
        self.uow = uow
        self.gateway = gateway
        self.provider_timeout_seconds = (
            provider_timeout_seconds
            if provider_timeout_seconds is not None
            else ApplicationConfig.PAYMENT_PROVIDER_TIMEOUT_SECONDS
        )

    async def execute(self, command: ConfirmPaymentCommand) -> Result[ConfirmPaymentResponse]:
        """
        Execute confirm payment use case.

        Args:
            command: ConfirmPaymentCommand with provider ids and signature

        Returns:
            Result[ConfirmPaymentResponse], or Error
            (PAYMENT_RECORD_NOT_FOUND, PAYMENT_TENANT_MISMATCH, SIGNATURE_MISMATCH,
            DUPLICATE_IDEMPOTENCY_KEY, PAYMENT_NOT_CONFIRMABLE,
            CONFIRMATION_TIMEOUT, INVALID_TRANSITION)
        """
        async with self.uow:
            ledger = PaymentLedger(
                self.uow,
                self.gateway,
                provider_timeout_seconds=self.provider_timeout_seconds,
            )
            result = await ledger.confirm_provider_payment(
                provider_order_id=command.provider_order_id,
                provider_payment_id=command.provider_payment_id,
                provider_signature=command.provider_signature,
                tenant_id=command.tenant_id,
            )

            if result.is_err():
                if result.error.code == ErrorCode.SIGNATURE_MISMATCH:
                    # Keep the FAILED record so the attempt cannot be replayed
                    await self.uow.commit()
                return Return.err(result.error)

            await self.uow.commit()

            confirmation = result.value
            return Return.ok(
                ConfirmPaymentResponse(
                    payment_id=confirmation.payment_id,
                    tenant_id=confirmation.tenant_id,
                    status=confirmation.status,
                    plan_code=confirmation.plan_code,
                    billing_cycle=confirmation.billing_cycle,
                    already_processed=confirmation.already_processed,
                )
            )
