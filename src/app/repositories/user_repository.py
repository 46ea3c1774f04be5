from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """User by email, compared case-insensitively"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a user; email uniqueness is enforced by the table"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Flush changes to verification state, tenant link or last login"""
        pass
