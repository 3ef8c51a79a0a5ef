from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import delete, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.storage_errors import translate_storage_errors
from src.app.repositories.otp_repository import IOtpRepository
from src.domain.entities import Otp


class OtpRepository(IOtpRepository):
    """Otp repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def create(self, otp: Otp) -> Otp:
        """Persist a newly issued OTP"""
        self.session.add(otp)
        await self.session.flush()
        await self.session.refresh(otp)
        return otp

    @translate_storage_errors
    async def count_created_since(self, user_id: UUID, since: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(Otp)
            .where(Otp.user_id == user_id, Otp.created_at > since)
        )
        result = await self.session.exec(stmt)
        return result.one()

    @translate_storage_errors
    async def get_latest_for_email_since(
        self, email: str, since: datetime
    ) -> Optional[Otp]:
        stmt = (
            select(Otp)
            .where(Otp.email == email, Otp.created_at > since)
            .order_by(Otp.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    @translate_storage_errors
    async def delete_by_user_id(self, user_id: UUID) -> int:
        stmt = delete(Otp).where(Otp.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_storage_errors
    async def delete_created_before(self, before: datetime) -> int:
        stmt = delete(Otp).where(Otp.created_at <= before)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
