"""
User Entity

Represents a registered account identified by its email address.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class User(SQLModel, table=True):
    """
    User entity - one account per email address.

    Business Rules:
    - Email must be unique across all users
    - password_hash is a "salt:hash" scrypt composite, never plaintext
    - A user is verified iff email_verified_at is set
    - email_verified_at is written once, by a successful OTP verification
    - profile_image holds the stored upload filename, not a URL
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    full_name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)
    profile_image: str = Field(max_length=255)

    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    @property
    def is_verified(self) -> bool:
        return self.email_verified_at is not None
