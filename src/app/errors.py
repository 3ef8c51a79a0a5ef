"""
Error taxonomy shared by the application and adapter layers.

Use cases report expected failures through ``Result`` using the codes in
``ErrorCode``. Storage adapters raise ``StorageError`` tagged with a
``StorageErrorKind`` so that callers can classify a failure by its kind
without knowing which database driver produced it.
"""

from enum import Enum
from typing import List, Optional


class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    BAD_REQUEST = "BAD_REQUEST"
    RATE_LIMITED = "RATE_LIMITED"
    OTP_INVALID = "OTP_INVALID"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class StorageErrorKind(str, Enum):
    """Closed set of storage failure kinds"""

    validation = "validation"
    unique_constraint = "unique_constraint"
    foreign_key_constraint = "foreign_key_constraint"
    database = "database"
    connection = "connection"
    timeout = "timeout"
    empty_result = "empty_result"


class StorageError(Exception):
    def __init__(
        self,
        kind: StorageErrorKind,
        message: str,
        details: Optional[List[str]] = None,
    ):
        self.kind = kind
        self.message = message
        self.details = details or []
        super().__init__(message)


class EmailDeliveryError(Exception):
    """Raised by email adapters when a message could not be handed to the transport"""
