"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import TokenType
from .user import User
from .otp import Otp

__all__ = [
    # Enums
    "TokenType",
    # Entities
    "User",
    "Otp",
]
