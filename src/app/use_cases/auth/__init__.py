"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .send_otp_use_case import SendOtpUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import (
    RegisterCommand,
    UserView,
    AuthTokens,
    AuthResponse,
    MessageResponse,
    SendOtpResponse,
    ForgotPasswordResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "SendOtpUseCase",
    "VerifyEmailUseCase",
    "RefreshTokenUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "ChangePasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "AuthTokens",
    "MessageResponse",
    "SendOtpResponse",
    "ForgotPasswordResponse",
    # DTOs - Nested Models
    "UserView",
]
