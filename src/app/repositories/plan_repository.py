from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Plan


class IPlanRepository(ABC):
    """Plan repository interface - application layer"""

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[Plan]:
        """Get plan by code, active or archived"""
        pass

    @abstractmethod
    async def get_by_tier_level(self, tier_level: int) -> Optional[Plan]:
        """Get plan occupying a tier level"""
        pass

    @abstractmethod
    async def list(self, include_inactive: bool = False) -> List[Plan]:
        """List plans ordered by tier level"""
        pass

    @abstractmethod
    async def create(self, plan: Plan) -> Plan:
        """Create a new plan"""
        pass

    @abstractmethod
    async def update(self, plan: Plan) -> Plan:
        """Update existing plan"""
        pass
