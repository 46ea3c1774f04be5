from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import PaymentRecord


class IPaymentRepository(ABC):
    """PaymentRecord repository interface - application layer (append-only)"""

    @abstractmethod
    async def get_by_id(self, payment_id: UUID) -> Optional[PaymentRecord]:
        """Get payment record by ID"""
        pass

    @abstractmethod
    async def get_by_provider_order_id(self, order_id: str) -> Optional[PaymentRecord]:
        """Get payment record by provider order ID (idempotency key)"""
        pass

    @abstractmethod
    async def get_by_provider_payment_id(
        self, payment_id: str
    ) -> Optional[PaymentRecord]:
        """Get payment record by provider payment ID (idempotency key)"""
        pass

    @abstractmethod
    async def create(self, record: PaymentRecord) -> PaymentRecord:
        """Append a new payment record"""
        pass

    @abstractmethod
    async def complete_if_pending(
        self, payment_id: UUID, provider_payment_id: str, provider_signature: str
    ) -> bool:
        """
        Atomically move a PENDING record to COMPLETED.

        Returns True only for the caller whose update matched a PENDING row.
        """
        pass

    @abstractmethod
    async def fail_if_pending(self, payment_id: UUID, reason: str) -> bool:
        """Atomically move a PENDING record to FAILED"""
        pass

    @abstractmethod
    async def list_by_tenant(self, tenant_id: UUID, limit: int) -> List[PaymentRecord]:
        """List a tenant's payment records, newest first"""
        pass
