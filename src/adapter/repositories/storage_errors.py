"""
Translation of SQLAlchemy failures into tagged StorageErrors.

This is the only place that inspects the database library's exception
hierarchy. Everything above the adapter layer switches on
``StorageError.kind``.
"""

import functools
import logging

from sqlalchemy import exc as sa_exc

from src.app.errors import StorageError, StorageErrorKind

logger = logging.getLogger(__name__)

# Checked in order, first match wins
_KIND_BY_EXCEPTION = (
    (sa_exc.DataError, StorageErrorKind.validation),
    (sa_exc.NoResultFound, StorageErrorKind.empty_result),
    (sa_exc.TimeoutError, StorageErrorKind.timeout),
    (sa_exc.DisconnectionError, StorageErrorKind.connection),
    (sa_exc.InterfaceError, StorageErrorKind.connection),
    (sa_exc.OperationalError, StorageErrorKind.connection),
)


def _integrity_kind(message: str) -> StorageErrorKind:
    lowered = message.lower()
    if "unique" in lowered or "duplicate" in lowered:
        return StorageErrorKind.unique_constraint
    if "foreign key" in lowered:
        return StorageErrorKind.foreign_key_constraint
    if "not null" in lowered or "check constraint" in lowered:
        return StorageErrorKind.validation
    return StorageErrorKind.database


def to_storage_error(error: sa_exc.SQLAlchemyError) -> StorageError:
    """Tag a SQLAlchemy exception with its StorageErrorKind"""
    orig = getattr(error, "orig", None)
    message = str(orig) if orig is not None else str(error)

    if isinstance(error, sa_exc.IntegrityError):
        kind = _integrity_kind(message)
    else:
        kind = next(
            (k for exc_type, k in _KIND_BY_EXCEPTION if isinstance(error, exc_type)),
            StorageErrorKind.database,
        )

    return StorageError(kind, message, details=[message])


def translate_storage_errors(func):
    """Re-raise SQLAlchemy errors from an async repository method as StorageError"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except sa_exc.SQLAlchemyError as e:
            storage_error = to_storage_error(e)
            logger.error(f"Storage failure ({storage_error.kind.value}): {storage_error.message}")
            raise storage_error from e

    return wrapper
