"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TokenType(str, Enum):
    """Kind of signed token, carried in the ``type`` claim"""

    access = "Access"
    refresh = "Refresh"
