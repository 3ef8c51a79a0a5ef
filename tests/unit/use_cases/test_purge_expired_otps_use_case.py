from datetime import datetime, timedelta

import pytest

from src.app.services.otp_service import OtpPolicy
from src.app.use_cases.admin import PurgeExpiredOtpsUseCase

NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_purge_uses_longest_window(mock_uow, otp_policy):
    mock_uow.otps.delete_created_before.return_value = 5

    result = await PurgeExpiredOtpsUseCase(mock_uow, otp_policy, clock=lambda: NOW).execute()

    assert result.is_ok()
    assert result.value.status == "purged"
    assert result.value.otps_purged == 5
    mock_uow.otps.delete_created_before.assert_called_once_with(NOW - timedelta(minutes=60))
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_purge_with_expiry_longer_than_window(mock_uow):
    policy = OtpPolicy(expires=timedelta(minutes=90), rate_limit_window=timedelta(minutes=30))

    await PurgeExpiredOtpsUseCase(mock_uow, policy, clock=lambda: NOW).execute()

    mock_uow.otps.delete_created_before.assert_called_once_with(NOW - timedelta(minutes=90))
