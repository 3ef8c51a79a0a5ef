"""
Register Use Case

Creates an account with a profile image, or hands back the pending
account when the email is registered but not yet verified.
"""

import logging

from src.app.errors import ErrorCode
from src.app.services.password_hasher import hash_secret_async
from src.app.services.token_service import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.upload_storage import IUploadStorage
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, AuthTokens, RegisterCommand, to_user_view

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthResponse] (user view + token pair)

    Business Logic:
    1. Look up user by email
    2. Absent: hash password, create unverified user, issue tokens
    3. Present and unverified: release the new upload, return the
       existing user unchanged (first registration wins)
    4. Present and verified: CONFLICT
    """

    def __init__(
        self, uow: UnitOfWork, token_issuer: TokenIssuer, uploads: IUploadStorage
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.uploads = uploads

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)

            if existing_user is None:
                password_hash = await hash_secret_async(command.password)
                user = await self.uow.users.create(
                    User(
                        full_name=command.full_name,
                        email=command.email,
                        password_hash=password_hash,
                        profile_image=command.profile_image,
                    )
                )
                await self.uow.commit()
                logger.info(f"Registered user {user.id}")
                return Return.ok(self._response(user))

            if not existing_user.is_verified:
                await self.uploads.remove(command.profile_image)
                logger.info(f"Repeat registration for unverified user {existing_user.id}")
                return Return.ok(self._response(existing_user))

            return Return.err(Error(ErrorCode.CONFLICT, "User already exists"))

    def _response(self, user: User) -> AuthResponse:
        pair = self.token_issuer.issue_pair(str(user.id))
        return AuthResponse(
            user=to_user_view(user, self.uploads),
            tokens=AuthTokens(
                access_token=pair.access_token, refresh_token=pair.refresh_token
            ),
        )
