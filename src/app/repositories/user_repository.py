from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def mark_email_verified(self, user_id: UUID, verified_at: datetime) -> int:
        """Set email_verified_at for a user, returns number of rows updated"""
        pass

    @abstractmethod
    async def update_password(self, user_id: UUID, password_hash: str) -> int:
        """Replace a user's password hash, returns number of rows updated"""
        pass
