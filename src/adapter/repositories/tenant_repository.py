from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.tenant_repository import ITenantRepository
from src.domain.entities import Tenant


class TenantRepository(ITenantRepository):
    """
    Tenant (clinic) repository implementation using SQLModel.

    Subscription fields are only changed through SubscriptionStateMachine,
    which calls update() once per transition.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        stmt = (
            select(Tenant)
            .where(Tenant.id == tenant_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_registration_id(self, registration_id: str) -> Optional[Tenant]:
        """Registration ids are stored upper-cased"""
        stmt = select(Tenant).where(Tenant.registration_id == registration_id.strip().upper())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, tenant: Tenant) -> Tenant:
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Flush subscription changes and bump updated_at"""
        tenant.updated_at = datetime.utcnow()
        self.session.add(tenant)
        await self.session.flush()
        return tenant
