from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.payment_repository import IPaymentRepository
from src.domain.entities import PaymentRecord, PaymentStatus


class PaymentRepository(IPaymentRepository):
    """
    PaymentRecord repository implementation using SQLModel.

    Status changes go through conditional UPDATE statements so that two
    concurrent confirmations cannot both observe PENDING and both win.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, payment_id: UUID) -> Optional[PaymentRecord]:
        """Get payment record by ID"""
        stmt = (
            select(PaymentRecord)
            .where(PaymentRecord.id == payment_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_provider_order_id(self, order_id: str) -> Optional[PaymentRecord]:
        """Get payment record by provider order ID"""
        stmt = (
            select(PaymentRecord)
            .where(PaymentRecord.provider_order_id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_provider_payment_id(
        self, payment_id: str
    ) -> Optional[PaymentRecord]:
        """Get payment record by provider payment ID"""
        stmt = (
            select(PaymentRecord)
            .where(PaymentRecord.provider_payment_id == payment_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, record: PaymentRecord) -> PaymentRecord:
        """Append a new payment record"""
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def complete_if_pending(
        self, payment_id: UUID, provider_payment_id: str, provider_signature: str
    ) -> bool:
        """UPDATE ... SET status=COMPLETED WHERE id=? AND status=PENDING"""
        stmt = (
            update(PaymentRecord)
            .where(PaymentRecord.id == payment_id)
            .where(PaymentRecord.status == PaymentStatus.PENDING)
            .values(
                status=PaymentStatus.COMPLETED,
                provider_payment_id=provider_payment_id,
                provider_signature=provider_signature,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def fail_if_pending(self, payment_id: UUID, reason: str) -> bool:
        """UPDATE ... SET status=FAILED WHERE id=? AND status=PENDING"""
        stmt = (
            update(PaymentRecord)
            .where(PaymentRecord.id == payment_id)
            .where(PaymentRecord.status == PaymentStatus.PENDING)
            .values(
                status=PaymentStatus.FAILED,
                failure_reason=reason,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def list_by_tenant(self, tenant_id: UUID, limit: int) -> List[PaymentRecord]:
        """List a tenant's payment records, newest first"""
        stmt = (
            select(PaymentRecord)
            .where(PaymentRecord.tenant_id == tenant_id)
            .order_by(PaymentRecord.created_at.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

