from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.doctor_repository import IDoctorRepository
from src.domain.entities import Doctor


class DoctorRepository(IDoctorRepository):
    """Doctor repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_active_seats(self, tenant_id: UUID) -> int:
        """Count non-archived doctors of a tenant"""
        stmt = (
            select(func.count())
            .select_from(Doctor)
            .where(Doctor.tenant_id == tenant_id)
            .where(Doctor.is_deleted == False)  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return int(result.one())

    async def get_by_id(self, doctor_id: UUID) -> Optional[Doctor]:
        """Get doctor by ID"""
        stmt = select(Doctor).where(Doctor.id == doctor_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, doctor: Doctor) -> Doctor:
        """Create a new doctor"""
        self.session.add(doctor)
        await self.session.flush()
        await self.session.refresh(doctor)
        return doctor

    async def update(self, doctor: Doctor) -> Doctor:
        """Update existing doctor"""
        self.session.add(doctor)
        await self.session.flush()
        await self.session.refresh(doctor)
        return doctor
