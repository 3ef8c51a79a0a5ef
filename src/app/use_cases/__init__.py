"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, email verification and password flows
- admin/: Maintenance operations
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    SendOtpUseCase,
    VerifyEmailUseCase,
    RefreshTokenUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    ChangePasswordUseCase,
)
from .admin import PurgeExpiredOtpsUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "SendOtpUseCase",
    "VerifyEmailUseCase",
    "RefreshTokenUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "ChangePasswordUseCase",
    # Admin
    "PurgeExpiredOtpsUseCase",
]
