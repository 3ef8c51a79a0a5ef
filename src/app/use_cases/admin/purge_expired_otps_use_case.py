"""
Use Case: Purge Expired OTPs

Deletes OTP rows that can no longer affect verification or rate limiting.
"""

import logging
from datetime import datetime
from typing import Callable

from pydantic import BaseModel

from src.app.services.otp_service import OtpPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)


class PurgeExpiredOtpsResponse(BaseModel):
    """Response DTO for PurgeExpiredOtpsUseCase"""

    status: str
    otps_purged: int


class PurgeExpiredOtpsUseCase:
    """
    Purge OTPs older than both the expiry and the rate-limit windows.

    Rows inside the rate-limit window are kept even when expired, since
    they still count towards the per-user issuance cap.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        policy: OtpPolicy,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.policy = policy
        self.clock = clock

    async def execute(self) -> Result[PurgeExpiredOtpsResponse]:
        retention = max(self.policy.expires, self.policy.rate_limit_window)
        cutoff = self.clock() - retention

        async with self.uow:
            purged = await self.uow.otps.delete_created_before(cutoff)
            await self.uow.commit()

        logger.info(f"Purged {purged} OTPs created before {cutoff.isoformat()}")
        return Return.ok(PurgeExpiredOtpsResponse(status="purged", otps_purged=purged))
