"""
List Payments Use Case

Billing history of a tenant, newest first.
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.payment_ledger import PaymentLedger
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ListPaymentsResponse


class ListPaymentsUseCase:
    """Read-only listing; limit is clamped to 1..100 (default 20)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID, limit: Optional[int] = None) -> Result[ListPaymentsResponse]:
        async with self.uow:
            ledger = PaymentLedger(self.uow, gateway=None)
            payments = await ledger.list_payments(tenant_id, limit)
            return Return.ok(ListPaymentsResponse(payments=payments, count=len(payments)))
