"""
SMTP implementation of the email port.

smtplib is blocking, so every send runs in a worker thread. SMTP and socket
failures are raised to the caller as EmailDeliveryError.
"""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Optional

from src.adapter.services.email_templates import otp_email, reset_link_email
from src.app.errors import EmailDeliveryError
from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    def __init__(
        self,
        host: str,
        port: int,
        from_email: str,
        app_name: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 10,
    ):
        self.host = host
        self.port = port
        self.from_email = from_email
        self.app_name = app_name
        self.username = username
        self.password = password
        self.timeout = timeout

    async def send_otp_email(self, to: str, otp: str) -> None:
        subject, html, text = otp_email(self.app_name, otp)
        await self._send(to, subject, html, text)

    async def send_reset_link(self, to: str, url: str) -> None:
        subject, html, text = reset_link_email(self.app_name, url)
        await self._send(to, subject, html, text)

    def build_message(self, to: str, subject: str, html: str, text: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = f"{self.app_name} <{self.from_email}>"
        msg["To"] = to
        msg["X-Priority"] = "1"
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
        return msg

    async def _send(self, to: str, subject: str, html: str, text: str) -> None:
        msg = self.build_message(to, subject, html, text)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {self.host}:{self.port} failed: {e}")
            raise EmailDeliveryError(str(e)) from e
        logger.info(f"Sent '{subject}' email")

    def _deliver(self, msg: EmailMessage) -> None:
        ctx = ssl.create_default_context()
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as s:
            s.starttls(context=ctx)
            if self.username and self.password:
                s.login(self.username, self.password)
            s.send_message(msg)
