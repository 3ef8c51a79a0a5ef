"""
Admin API Routes - Maintenance Endpoints

Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.api.response import ApiResponse, success
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.otp_service import OtpPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import PurgeExpiredOtpsResponse, PurgeExpiredOtpsUseCase
from src.depends import get_otp_policy, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/otps/purge",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[PurgeExpiredOtpsResponse],
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_expired_otps(
    uow: UnitOfWork = Depends(get_unit_of_work),
    policy: OtpPolicy = Depends(get_otp_policy),
):
    """
    Purge OTPs that are past both the expiry and rate-limit windows.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    result = await PurgeExpiredOtpsUseCase(uow, policy).execute()

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value)
