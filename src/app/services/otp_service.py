"""
OTP Engine

Issues, rate-limits and verifies the 4-digit email verification codes.

Lifecycle per user: NONE -> ISSUED -> VERIFIED | EXPIRED. Only the newest
OTP for an email that is still inside the expiry window can be verified.
Both windows are evaluated against the wall clock at call time.

The engine never commits. Callers own the transaction, and after a
successful verification the caller deletes every OTP for the user.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

from src.app.errors import ErrorCode
from src.app.services.password_hasher import (
    OTP_HASH_LENGTH,
    OTP_SALT_LENGTH,
    hash_secret_async,
    verify_secret_async,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Otp
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

OTP_MIN = 1000
OTP_MAX = 9999


@dataclass(frozen=True)
class OtpPolicy:
    expires: timedelta = timedelta(minutes=10)
    rate_limit_window: timedelta = timedelta(minutes=60)
    max_per_window: int = 3


@dataclass(frozen=True)
class IssuedOtp:
    """A persisted OTP together with its plaintext code (never stored)"""

    record: Otp
    otp: str


def generate_otp() -> str:
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


class OtpService:
    def __init__(
        self,
        uow: UnitOfWork,
        policy: OtpPolicy,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.policy = policy
        self.clock = clock

    async def create_otp(self, user_id: UUID, email: str) -> Result[IssuedOtp]:
        """
        Issue a new OTP for a user.

        Errors:
            - RATE_LIMITED: max_per_window OTPs already issued in the window
        """
        now = self.clock()
        window_start = now - self.policy.rate_limit_window
        issued = await self.uow.otps.count_created_since(user_id, window_start)
        if issued >= self.policy.max_per_window:
            logger.warning(f"OTP rate limit reached for user {user_id}")
            return Return.err(Error(ErrorCode.RATE_LIMITED, "Rate limit exceeded"))

        code = generate_otp()
        otp_hash = await hash_secret_async(code, OTP_HASH_LENGTH, OTP_SALT_LENGTH)
        record = await self.uow.otps.create(
            Otp(email=email, user_id=user_id, otp_hash=otp_hash, created_at=now)
        )
        logger.info(f"Issued OTP {record.id} for user {user_id}")
        return Return.ok(IssuedOtp(record=record, otp=code))

    async def verify_otp(self, email: str, candidate: str) -> Result[Otp]:
        """
        Check a code against the newest unexpired OTP for an email.

        A missing OTP and a wrong code produce the same OTP_INVALID error.
        """
        since = self.clock() - self.policy.expires
        record = await self.uow.otps.get_latest_for_email_since(email, since)
        if record is not None and await verify_secret_async(
            candidate, record.otp_hash, OTP_HASH_LENGTH
        ):
            return Return.ok(record)
        return Return.err(Error(ErrorCode.OTP_INVALID, "Invalid OTP"))
