from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Otp


class IOtpRepository(ABC):
    """Otp repository interface - application layer"""

    @abstractmethod
    async def create(self, otp: Otp) -> Otp:
        """Persist a newly issued OTP"""
        pass

    @abstractmethod
    async def count_created_since(self, user_id: UUID, since: datetime) -> int:
        """Count OTPs issued to a user strictly after ``since``"""
        pass

    @abstractmethod
    async def get_latest_for_email_since(
        self, email: str, since: datetime
    ) -> Optional[Otp]:
        """Most recent OTP for an email created strictly after ``since``"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete every OTP belonging to a user, returns number deleted"""
        pass

    @abstractmethod
    async def delete_created_before(self, before: datetime) -> int:
        """Delete OTPs created at or before ``before``, returns number deleted"""
        pass
