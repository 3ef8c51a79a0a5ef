from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.otp_service import OtpPolicy
from src.app.services.token_service import TokenIssuer, TokenSettings


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.mark_email_verified = AsyncMock(return_value=1)
    uow.users.update_password = AsyncMock(return_value=1)

    uow.otps = MagicMock()
    uow.otps.create = AsyncMock(side_effect=lambda otp: otp)
    uow.otps.count_created_since = AsyncMock(return_value=0)
    uow.otps.get_latest_for_email_since = AsyncMock(return_value=None)
    uow.otps.delete_by_user_id = AsyncMock(return_value=1)
    uow.otps.delete_created_before = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def token_issuer():
    return TokenIssuer(
        TokenSettings(
            access_secret="unit-access-secret",
            refresh_secret="unit-refresh-secret",
            issuer="auth-service",
            audience="auth-service-client",
            access_expires=timedelta(minutes=10),
            refresh_expires=timedelta(minutes=20),
        )
    )


@pytest.fixture
def otp_policy():
    return OtpPolicy()


@pytest.fixture
def mock_uploads():
    uploads = MagicMock()
    uploads.store = AsyncMock(return_value="stored.png")
    uploads.remove = AsyncMock()
    uploads.public_url = MagicMock(side_effect=lambda name: f"http://test/uploads/profile/{name}")
    return uploads


@pytest.fixture
def mock_email_sender():
    sender = MagicMock()
    sender.send_otp_email = AsyncMock()
    sender.send_reset_link = AsyncMock()
    return sender
