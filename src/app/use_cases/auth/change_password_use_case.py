"""
Change Password Use Case

Replaces the password of an authenticated user after checking the old one.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.errors import ErrorCode
from src.app.services.password_hasher import hash_secret_async, verify_secret_async
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Business Rules:
    - Missing or unknown user_id is NOT_FOUND
    - Old password must verify (BAD_REQUEST otherwise)
    - New hash equal to the stored hash is BAD_REQUEST
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, old_password: str, new_password: str, user_id: Optional[UUID]
    ) -> Result[MessageResponse]:
        if user_id is None:
            return Return.err(Error(ErrorCode.NOT_FOUND, "No account found"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "No account found"))

            if not await verify_secret_async(old_password, user.password_hash):
                return Return.err(Error(ErrorCode.BAD_REQUEST, "Invalid password"))

            new_hash = await hash_secret_async(new_password)
            # Salted hashes: reusing the old plaintext produces a different
            # hash and passes this check.
            if new_hash == user.password_hash:
                return Return.err(
                    Error(
                        ErrorCode.BAD_REQUEST,
                        "New password cannot be same as old password",
                    )
                )

            await self.uow.users.update_password(user.id, new_hash)
            await self.uow.commit()

        logger.info(f"Password changed for user {user_id}")
        return Return.ok(MessageResponse(message="Password changed successfully"))
