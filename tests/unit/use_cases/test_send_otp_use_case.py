from uuid import uuid4

import pytest

from src.app.errors import EmailDeliveryError, ErrorCode
from src.app.services.otp_service import OTP_MAX, OTP_MIN
from src.app.use_cases.auth import SendOtpUseCase
from src.domain.base import utc_now
from src.domain.entities import User


def build_user(verified=False):
    return User(
        id=uuid4(),
        full_name="Jane Doe",
        email="jane@example.com",
        password_hash="salt:hash",
        profile_image="avatar.png",
        email_verified_at=utc_now() if verified else None,
    )


@pytest.mark.asyncio
async def test_send_otp_exposed_outside_production(mock_uow, otp_policy):
    user = build_user()
    mock_uow.users.get_by_email.return_value = user

    result = await SendOtpUseCase(mock_uow, otp_policy, expose_otp=True).execute(
        "jane@example.com"
    )

    assert result.is_ok()
    assert result.value.message == "OTP sent successfully"
    assert OTP_MIN <= int(result.value.otp) <= OTP_MAX
    created = mock_uow.otps.create.call_args.args[0]
    assert created.user_id == user.id
    assert created.email == "jane@example.com"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_send_otp_hidden_in_production(mock_uow, otp_policy):
    mock_uow.users.get_by_email.return_value = build_user()

    result = await SendOtpUseCase(mock_uow, otp_policy, expose_otp=False).execute(
        "jane@example.com"
    )

    assert result.is_ok()
    assert result.value.otp is None


@pytest.mark.asyncio
async def test_send_otp_emails_code_after_commit(mock_uow, otp_policy, mock_email_sender):
    mock_uow.users.get_by_email.return_value = build_user()
    mock_email_sender.send_otp_email.side_effect = (
        lambda to, otp: mock_uow.commit.assert_called_once()
    )

    result = await SendOtpUseCase(
        mock_uow, otp_policy, email_sender=mock_email_sender, expose_otp=True
    ).execute("jane@example.com")

    assert result.is_ok()
    mock_email_sender.send_otp_email.assert_called_once_with(
        "jane@example.com", result.value.otp
    )


@pytest.mark.asyncio
async def test_send_otp_email_failure(mock_uow, otp_policy, mock_email_sender):
    mock_uow.users.get_by_email.return_value = build_user()
    mock_email_sender.send_otp_email.side_effect = EmailDeliveryError("smtp down")

    result = await SendOtpUseCase(
        mock_uow, otp_policy, email_sender=mock_email_sender
    ).execute("jane@example.com")

    assert result.is_err()
    assert result.error.code == ErrorCode.INTERNAL_ERROR
    assert result.error.reason == "smtp down"


@pytest.mark.asyncio
async def test_send_otp_does_not_mask_unexpected_sender_errors(
    mock_uow, otp_policy, mock_email_sender
):
    mock_uow.users.get_by_email.return_value = build_user()
    mock_email_sender.send_otp_email.side_effect = TypeError("bad template argument")

    with pytest.raises(TypeError):
        await SendOtpUseCase(
            mock_uow, otp_policy, email_sender=mock_email_sender
        ).execute("jane@example.com")


@pytest.mark.asyncio
async def test_send_otp_unknown_email(mock_uow, otp_policy):
    result = await SendOtpUseCase(mock_uow, otp_policy).execute("nobody@example.com")

    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_FOUND
    assert result.error.message == "User not found with this email"


@pytest.mark.asyncio
async def test_send_otp_already_verified(mock_uow, otp_policy):
    mock_uow.users.get_by_email.return_value = build_user(verified=True)

    result = await SendOtpUseCase(mock_uow, otp_policy).execute("jane@example.com")

    assert result.is_err()
    assert result.error.code == ErrorCode.BAD_REQUEST
    assert result.error.message == "Email already verified"
    mock_uow.otps.create.assert_not_called()


@pytest.mark.asyncio
async def test_send_otp_rate_limited(mock_uow, otp_policy):
    mock_uow.users.get_by_email.return_value = build_user()
    mock_uow.otps.count_created_since.return_value = 3

    result = await SendOtpUseCase(mock_uow, otp_policy).execute("jane@example.com")

    assert result.is_err()
    assert result.error.code == ErrorCode.RATE_LIMITED
    mock_uow.commit.assert_not_called()
