from unittest.mock import MagicMock, patch

import smtplib

import pytest

from src.adapter.services.smtp_email_sender import SmtpEmailSender
from src.app.errors import EmailDeliveryError


@pytest.fixture
def sender():
    return SmtpEmailSender(
        host="smtp.example.com",
        port=587,
        from_email="no-reply@example.com",
        app_name="Auth Service",
        username="mailer",
        password="pw",
    )


def test_build_message_has_text_and_html(sender):
    msg = sender.build_message("jane@example.com", "Subject", "<p>hi</p>", "hi")

    assert msg["To"] == "jane@example.com"
    assert msg["From"] == "Auth Service <no-reply@example.com>"
    assert msg.is_multipart()
    types = [part.get_content_type() for part in msg.iter_parts()]
    assert types == ["text/plain", "text/html"]


@pytest.mark.asyncio
async def test_send_otp_email_delivers_over_starttls(sender):
    with patch("src.adapter.services.smtp_email_sender.smtplib.SMTP") as smtp_cls:
        smtp = MagicMock()
        smtp_cls.return_value.__enter__.return_value = smtp

        await sender.send_otp_email("jane@example.com", "4821")

    smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=10)
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("mailer", "pw")
    sent = smtp.send_message.call_args.args[0]
    assert "4821" in sent.get_body(preferencelist=("plain",)).get_content()


@pytest.mark.asyncio
async def test_connection_failure_raised_as_delivery_error(sender):
    with patch("src.adapter.services.smtp_email_sender.smtplib.SMTP") as smtp_cls:
        smtp_cls.side_effect = OSError("connection refused")

        with pytest.raises(EmailDeliveryError) as exc_info:
            await sender.send_reset_link("jane@example.com", "http://x/reset-password?token=t")

    assert isinstance(exc_info.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_smtp_rejection_raised_as_delivery_error(sender):
    with patch("src.adapter.services.smtp_email_sender.smtplib.SMTP") as smtp_cls:
        smtp = MagicMock()
        smtp.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
        smtp_cls.return_value.__enter__.return_value = smtp

        with pytest.raises(EmailDeliveryError):
            await sender.send_otp_email("jane@example.com", "4821")

    smtp.send_message.assert_not_called()
