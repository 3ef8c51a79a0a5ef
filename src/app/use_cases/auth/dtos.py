"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.services.upload_storage import IUploadStorage
from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes and the profile
    image has been stored. profile_image is the stored filename.
    """

    email: str
    password: str
    full_name: str
    profile_image: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserView(BaseModel):
    """Sanitized user - never carries the password hash"""

    id: str
    full_name: str
    email: str
    profile_image: str
    created_at: datetime
    updated_at: datetime
    email_verified_at: Optional[datetime] = None


class AuthTokens(BaseModel):
    access_token: str
    refresh_token: str


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    user: UserView
    tokens: AuthTokens


class MessageResponse(BaseModel):
    message: str


class SendOtpResponse(BaseModel):
    """otp is only populated outside production"""

    message: str
    otp: Optional[str] = None


class ForgotPasswordResponse(BaseModel):
    """link is only populated outside production"""

    message: str
    link: Optional[str] = None


def to_user_view(user: User, uploads: IUploadStorage) -> UserView:
    return UserView(
        id=str(user.id),
        full_name=user.full_name,
        email=user.email,
        profile_image=uploads.public_url(user.profile_image),
        created_at=user.created_at,
        updated_at=user.updated_at,
        email_verified_at=user.email_verified_at,
    )
