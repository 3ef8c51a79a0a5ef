"""
Reset Password Use Case

Sets a new password for the user identified by a verified access token.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.errors import ErrorCode
from src.app.services.password_hasher import hash_secret_async
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Business Rules:
    - user_id comes from the bearer token gate, never from the request body
    - Missing or unknown user_id is NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, new_password: str, user_id: Optional[UUID]
    ) -> Result[MessageResponse]:
        if user_id is None:
            return Return.err(Error(ErrorCode.NOT_FOUND, "No account found"))

        async with self.uow:
            password_hash = await hash_secret_async(new_password)
            updated = await self.uow.users.update_password(user_id, password_hash)
            if updated == 0:
                return Return.err(Error(ErrorCode.NOT_FOUND, "No account found"))

            await self.uow.commit()

        logger.info(f"Password reset for user {user_id}")
        return Return.ok(MessageResponse(message="Password reset successfully"))
