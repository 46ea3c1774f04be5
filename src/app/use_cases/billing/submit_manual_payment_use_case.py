"""
Submit Manual Payment Use Case

Records an offline payment (bank transfer, cheque) for later approval.
"""

from libs.result import Result, Return
from src.app.services.dtos import ManualPaymentReceipt
from src.app.services.payment_ledger import PaymentLedger
from src.app.services.plan_catalog import parse_billing_cycle
from src.app.services.unit_of_work import UnitOfWork
from .dtos import SubmitManualPaymentCommand


class SubmitManualPaymentUseCase:
    """
    Use case for manual payment submission.

    Business Rules:
    - Transaction reference is required
    - Amount on the record is the catalog price; the submitted figure is kept
      for reference only
    - Record stays PENDING and the subscription is not activated
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SubmitManualPaymentCommand) -> Result[ManualPaymentReceipt]:
        cycle = parse_billing_cycle(command.billing_cycle)
        if cycle.is_err():
            return Return.err(cycle.error)

        async with self.uow:
            # Manual payments never reach the provider
            ledger = PaymentLedger(self.uow, gateway=None)
            result = await ledger.submit_manual_payment(
                tenant_id=command.tenant_id,
                plan_code=command.plan_code,
                billing_cycle=cycle.value,
                transaction_ref=command.transaction_ref,
                submitted_amount_minor_units=command.submitted_amount_minor_units,
                user_id=command.user_id,
                email=command.email,
            )
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()
            return Return.ok(result.value)
