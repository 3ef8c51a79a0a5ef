"""
Forgot Password Use Case

Builds a password reset link carrying a short-lived access token.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from src.app.errors import EmailDeliveryError, ErrorCode
from src.app.services.email_sender import IEmailSender
from src.app.services.token_service import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import ForgotPasswordResponse

logger = logging.getLogger(__name__)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset link.

    Business Rules:
    - Unknown email is NOT_FOUND
    - Unverified email is UNAUTHORIZED
    - The reset token is an ordinary access token for the user; the
      reset-password endpoint accepts it through the bearer gate
    - The link is returned only when expose_link is set
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        base_url: str,
        email_sender: Optional[IEmailSender] = None,
        expose_link: bool = False,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.base_url = base_url.rstrip("/")
        self.email_sender = email_sender
        self.expose_link = expose_link

    async def execute(self, email: str) -> Result[ForgotPasswordResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(
                    Error(ErrorCode.NOT_FOUND, "No account found with this email")
                )

            if not user.is_verified:
                return Return.err(Error(ErrorCode.UNAUTHORIZED, "Email not verified"))

            user_id, user_email = user.id, user.email

        token = self.token_issuer.issue_access(str(user_id))
        url = f"{self.base_url}/reset-password?{urlencode({'token': token})}"

        if self.email_sender is not None:
            try:
                await self.email_sender.send_reset_link(user_email, url)
            except EmailDeliveryError as e:
                logger.error(f"Failed to send reset link to user {user_id}: {e}")
                return Return.err(
                    Error(ErrorCode.INTERNAL_ERROR, "Failed to send reset link", reason=str(e))
                )

        logger.info(f"Issued password reset link for user {user_id}")
        return Return.ok(
            ForgotPasswordResponse(
                message="Password reset link sent successfully",
                link=url if self.expose_link else None,
            )
        )
