from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Tenant


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Tenant by ID, reloaded from the database"""
        pass

    @abstractmethod
    async def get_by_registration_id(self, registration_id: str) -> Optional[Tenant]:
        """Tenant by medical registration ID (case-insensitive)"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Persist subscription state changes"""
        pass
