"""
Otp Entity

One issued one-time passcode used to prove ownership of an email address.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Otp(SQLModel, table=True):
    """
    Otp entity - a hashed 4-digit passcode issued to a user's email.

    Business Rules:
    - otp_hash is a "salt:hash" scrypt composite at the short OTP length
    - Valid for verification only within the expiry window from created_at
    - Issuance is capped per user over a trailing rate-limit window
    - All rows for a user are deleted once their email is verified
    - Stale rows stay until purged
    """

    __tablename__ = "otps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255)
    user_id: UUID = Field(foreign_key="users.id", nullable=False)
    otp_hash: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_otp_email_created_at", "email", "created_at"),
        Index("idx_otp_user_created_at", "user_id", "created_at"),
    )
