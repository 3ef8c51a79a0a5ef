from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound email port. Delivery failures raise EmailDeliveryError."""

    @abstractmethod
    async def send_otp_email(self, to: str, otp: str) -> None:
        """Send an email verification code"""
        pass

    @abstractmethod
    async def send_reset_link(self, to: str, url: str) -> None:
        """Send a password reset link"""
        pass
