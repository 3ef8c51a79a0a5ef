from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.otp_repository import OtpRepository
from src.adapter.repositories.storage_errors import translate_storage_errors
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.otps = OtpRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @translate_storage_errors
    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
