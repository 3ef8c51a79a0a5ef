"""
Login Use Case

Authenticates a verified user and returns a fresh token pair.
"""

import logging

from src.app.errors import ErrorCode
from src.app.services.password_hasher import verify_secret_async
from src.app.services.token_service import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.upload_storage import IUploadStorage
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, AuthTokens, to_user_view

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Unknown email is NOT_FOUND
    - Wrong password is UNAUTHORIZED
    - Unverified email is UNAUTHORIZED, checked after the password
    """

    def __init__(
        self, uow: UnitOfWork, token_issuer: TokenIssuer, uploads: IUploadStorage
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.uploads = uploads

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse containing user view and tokens, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "User not found"))

            if not await verify_secret_async(password, user.password_hash):
                return Return.err(Error(ErrorCode.UNAUTHORIZED, "Invalid credentials"))

            if not user.is_verified:
                return Return.err(Error(ErrorCode.UNAUTHORIZED, "Email not verified"))

            pair = self.token_issuer.issue_pair(str(user.id))
            logger.info(f"User {user.id} logged in")
            return Return.ok(
                AuthResponse(
                    user=to_user_view(user, self.uploads),
                    tokens=AuthTokens(
                        access_token=pair.access_token,
                        refresh_token=pair.refresh_token,
                    ),
                )
            )
