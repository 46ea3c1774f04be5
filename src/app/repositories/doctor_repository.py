from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Doctor


class IDoctorRepository(ABC):
    """Doctor repository interface - application layer"""

    @abstractmethod
    async def count_active_seats(self, tenant_id: UUID) -> int:
        """Count non-archived doctors of a tenant (always recomputed)"""
        pass

    @abstractmethod
    async def get_by_id(self, doctor_id: UUID) -> Optional[Doctor]:
        """Get doctor by ID"""
        pass

    @abstractmethod
    async def create(self, doctor: Doctor) -> Doctor:
        """Create a new doctor"""
        pass

    @abstractmethod
    async def update(self, doctor: Doctor) -> Doctor:
        """Update existing doctor"""
        pass
