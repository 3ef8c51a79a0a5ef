"""
Verify Email Use Case

Marks a user's email as verified using an OTP.
"""

import logging

from src.app.services.otp_service import OtpPolicy, OtpService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.libs.result import Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - OTP must be the newest unexpired one for the email (OTP_INVALID otherwise)
    - Sets email_verified_at on the owning user
    - Deletes every OTP of that user, not only the matched one
    """

    def __init__(self, uow: UnitOfWork, policy: OtpPolicy):
        self.uow = uow
        self.policy = policy

    async def execute(self, email: str, otp: str) -> Result[MessageResponse]:
        async with self.uow:
            verified = await OtpService(self.uow, self.policy).verify_otp(email, otp)
            if verified.is_err():
                return Return.err(verified.error)

            user_id = verified.value.user_id
            await self.uow.users.mark_email_verified(user_id, utc_now())
            purged = await self.uow.otps.delete_by_user_id(user_id)

            await self.uow.commit()

        logger.info(f"Verified email for user {user_id}, purged {purged} OTPs")
        return Return.ok(MessageResponse(message="Email verified successfully"))
