"""
Send OTP Use Case

Issues an email verification code to an unverified user.
"""

import logging
from typing import Optional

from src.app.errors import EmailDeliveryError, ErrorCode
from src.app.services.email_sender import IEmailSender
from src.app.services.otp_service import OtpPolicy, OtpService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import SendOtpResponse

logger = logging.getLogger(__name__)


class SendOtpUseCase:
    """
    Use case for sending an email verification OTP.

    Business Rules:
    - Unknown email is NOT_FOUND
    - Already verified email is BAD_REQUEST
    - Issuance is rate limited by the OTP engine (RATE_LIMITED)
    - The OTP is committed before any email is sent
    - The plaintext code is returned only when expose_otp is set
    """

    def __init__(
        self,
        uow: UnitOfWork,
        policy: OtpPolicy,
        email_sender: Optional[IEmailSender] = None,
        expose_otp: bool = False,
    ):
        self.uow = uow
        self.policy = policy
        self.email_sender = email_sender
        self.expose_otp = expose_otp

    async def execute(self, email: str) -> Result[SendOtpResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(
                    Error(ErrorCode.NOT_FOUND, "User not found with this email")
                )

            if user.is_verified:
                return Return.err(Error(ErrorCode.BAD_REQUEST, "Email already verified"))

            created = await OtpService(self.uow, self.policy).create_otp(
                user.id, user.email
            )
            if created.is_err():
                return Return.err(created.error)

            await self.uow.commit()
            user_id, user_email = user.id, user.email

        issued = created.value
        if self.email_sender is not None:
            try:
                await self.email_sender.send_otp_email(user_email, issued.otp)
            except EmailDeliveryError as e:
                logger.error(f"Failed to send OTP email to user {user_id}: {e}")
                return Return.err(
                    Error(ErrorCode.INTERNAL_ERROR, "Failed to send OTP email", reason=str(e))
                )

        return Return.ok(
            SendOtpResponse(
                message="OTP sent successfully",
                otp=issued.otp if self.expose_otp else None,
            )
        )
