from datetime import datetime
from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.plan_repository import IPlanRepository
from src.domain.entities import Plan


class PlanRepository(IPlanRepository):
    """Plan repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_code(self, code: str) -> Optional[Plan]:
        """Get plan by code, active or archived"""
        stmt = select(Plan).where(Plan.code == code)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_tier_level(self, tier_level: int) -> Optional[Plan]:
        """Get plan occupying a tier level"""
        stmt = select(Plan).where(Plan.tier_level == tier_level)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(self, include_inactive: bool = False) -> List[Plan]:
        """List plans ordered by tier level"""
        stmt = select(Plan)
        if not include_inactive:
            stmt = stmt.where(Plan.is_active == True)  # noqa: E712
        stmt = stmt.order_by(Plan.tier_level)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, plan: Plan) -> Plan:
        """Create a new plan"""
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan

    async def update(self, plan: Plan) -> Plan:
        """Update existing plan"""
        plan.updated_at = datetime.utcnow()
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan
