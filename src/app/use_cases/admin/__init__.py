"""Admin use cases for system administration operations."""

from .purge_expired_otps_use_case import (
    PurgeExpiredOtpsUseCase,
    PurgeExpiredOtpsResponse,
)

__all__ = [
    "PurgeExpiredOtpsUseCase",
    "PurgeExpiredOtpsResponse",
]
