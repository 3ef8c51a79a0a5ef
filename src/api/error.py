"""
API error types and classification.

Every failure that reaches a response passes through here: use case error
codes and storage error kinds are looked up in tables to pick a status code
and are wrapped in ClientError (4xx) or ServerError (5xx).
"""

from typing import Dict, Union

from fastapi import status

from src.app.errors import ErrorCode, StorageError, StorageErrorKind
from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        super().__init__(base_error.message)


STATUS_BY_CODE: Dict[str, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.OTP_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
}

# Storage kinds that are the client's fault; every other kind is a 500
CLIENT_STORAGE_ERRORS: Dict[StorageErrorKind, tuple] = {
    StorageErrorKind.validation: (ErrorCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST),
    StorageErrorKind.unique_constraint: (ErrorCode.CONFLICT, status.HTTP_409_CONFLICT),
}


def classify_error(error: Error) -> Union[ClientError, ServerError]:
    """Wrap a use case error in the exception matching its code"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        return ServerError(error)
    return ClientError(error, status_code=status_code)


def raise_for_error(error: Error):
    raise classify_error(error)


def classify_storage_error(error: StorageError) -> Union[ClientError, ServerError]:
    """
    Map a storage failure onto the API taxonomy.

    Validation failures become 400 with their messages joined, unique
    constraint violations 409, and everything else a 500 carrying the
    underlying message.
    """
    if error.kind in CLIENT_STORAGE_ERRORS:
        code, status_code = CLIENT_STORAGE_ERRORS[error.kind]
        message = ", ".join(error.details) if error.details else error.message
        return ClientError(Error(code, message), status_code=status_code)
    return ServerError(Error(ErrorCode.INTERNAL_ERROR, error.message, reason=error.kind.value))
