from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.errors import ErrorCode
from src.app.services.email_sender import IEmailSender
from src.app.services.otp_service import OtpPolicy
from src.app.services.token_service import TokenIssuer
from src.app.services.upload_storage import IUploadStorage
from src.libs.result import Error

security = HTTPBearer(auto_error=False)


def get_config(request: Request):
    return request.app.state.config


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_otp_policy(request: Request) -> OtpPolicy:
    return request.app.state.otp_policy


def get_upload_storage(request: Request) -> IUploadStorage:
    return request.app.state.upload_storage


def get_email_sender(request: Request) -> Optional[IEmailSender]:
    return request.app.state.email_sender


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> UUID:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        The token subject as a user UUID

    Raises:
        ClientError: 401 if the header is missing or the token is invalid or expired
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise ClientError(
            Error(ErrorCode.UNAUTHORIZED, "Authorization header missing or invalid"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    verified = token_issuer.verify_access(credentials.credentials)
    if verified.is_err():
        raise ClientError(verified.error, status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        return UUID(verified.value)
    except ValueError:
        raise ClientError(
            Error(ErrorCode.TOKEN_INVALID, "Invalid token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
