from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, raise_for_error
from src.api.response import ApiResponse, success
from src.app.errors import ErrorCode
from src.app.services.email_sender import IEmailSender
from src.app.services.otp_service import OtpPolicy
from src.app.services.token_service import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.upload_storage import IUploadStorage
from src.app.use_cases.auth import (
    AuthResponse,
    AuthTokens,
    ChangePasswordUseCase,
    ForgotPasswordResponse,
    ForgotPasswordUseCase,
    LoginUseCase,
    MessageResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    ResetPasswordUseCase,
    SendOtpResponse,
    SendOtpUseCase,
    VerifyEmailUseCase,
)
from src.depends import (
    get_config,
    get_current_user_id,
    get_email_sender,
    get_otp_policy,
    get_token_issuer,
    get_unit_of_work,
    get_upload_storage,
)
from src.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])

ALLOWED_IMAGE_TYPES = {"image/png", "image/jpg", "image/jpeg"}

PASSWORD_MIN = 8
PASSWORD_MAX = 16


def _exposes_secrets(config) -> bool:
    return config.ENVIRONMENT != "production"


async def _read_profile_image(profile_image: Optional[UploadFile], max_bytes: int) -> bytes:
    if profile_image is None or not profile_image.filename:
        raise ClientError(Error(ErrorCode.VALIDATION_ERROR, "profile_image is required"))

    if profile_image.content_type not in ALLOWED_IMAGE_TYPES:
        raise ClientError(
            Error(ErrorCode.VALIDATION_ERROR, "Only .png, .jpg and .jpeg format allowed!")
        )

    # Read one byte past the limit to detect oversize uploads
    content = await profile_image.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ClientError(
            Error(
                ErrorCode.VALIDATION_ERROR,
                f"Profile image must be {max_bytes // 1024} KB or smaller",
            )
        )
    return content


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[AuthResponse],
)
async def register(
    email: EmailStr = Form(...),
    password: str = Form(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX),
    full_name: str = Form(..., min_length=3),
    profile_image: Optional[UploadFile] = File(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    uploads: IUploadStorage = Depends(get_upload_storage),
    config=Depends(get_config),
):
    """
    Register a new account (multipart form).

    Stores the profile image first. If registration then fails, the stored
    image is removed before the error is returned.

    Raises:
        - 400 Bad Request: Invalid fields or profile image
        - 409 Conflict: Email already registered and verified
        - 500 Internal Server Error: Server error
    """
    content = await _read_profile_image(profile_image, config.MAX_PROFILE_IMAGE_BYTES)
    filename = await uploads.store(content, profile_image.filename)

    command = RegisterCommand(
        email=email, password=password, full_name=full_name, profile_image=filename
    )

    try:
        result = await RegisterUseCase(uow, token_issuer, uploads).execute(command)
    except Exception:
        await uploads.remove(filename)
        raise

    if result.is_err():
        await uploads.remove(filename)
        raise_for_error(result.error)

    return success(
        result.value,
        "User registered successfully! Please verify your email.",
        status.HTTP_201_CREATED,
    )


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=ApiResponse[AuthResponse])
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    uploads: IUploadStorage = Depends(get_upload_storage),
):
    """
    Authenticate a verified user and return a token pair.

    Raises:
        - 404 Not Found: No user with this email
        - 401 Unauthorized: Wrong password or email not verified
    """
    use_case = LoginUseCase(uow, token_issuer, uploads)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value)


class SendOtpRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post("/send-otp", status_code=status.HTTP_200_OK, response_model=ApiResponse[SendOtpResponse])
async def send_otp(
    request: SendOtpRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    policy: OtpPolicy = Depends(get_otp_policy),
    email_sender: Optional[IEmailSender] = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Issue an email verification OTP.

    The plaintext code is included in the response outside production.

    Raises:
        - 404 Not Found: No user with this email
        - 400 Bad Request: Email already verified
        - 429 Too Many Requests: OTP rate limit reached
    """
    use_case = SendOtpUseCase(
        uow, policy, email_sender=email_sender, expose_otp=_exposes_secrets(config)
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value, result.value.message)


class VerifyEmailRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    otp: str = Field(..., min_length=4, max_length=4, description="4 digit OTP")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=ApiResponse[MessageResponse])
async def verify_email(
    request: VerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    policy: OtpPolicy = Depends(get_otp_policy),
):
    """
    Verify an email address with an OTP.

    Raises:
        - 401 Unauthorized: OTP missing, expired or wrong (OTP_INVALID)
    """
    result = await VerifyEmailUseCase(uow, policy).execute(request.email, request.otp)

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value, result.value.message)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh-token", status_code=status.HTTP_200_OK, response_model=ApiResponse[AuthTokens])
async def refresh_token(
    request: RefreshRequest,
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Exchange a refresh token for a new access/refresh pair.

    Raises:
        - 401 Unauthorized: Invalid or expired refresh token
    """
    result = await RefreshTokenUseCase(token_issuer).execute(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[ForgotPasswordResponse],
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    email_sender: Optional[IEmailSender] = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Produce a password reset link.

    The link is included in the response outside production.

    Raises:
        - 404 Not Found: No user with this email
        - 401 Unauthorized: Email not verified
    """
    use_case = ForgotPasswordUseCase(
        uow,
        token_issuer,
        base_url=config.BASE_URL,
        email_sender=email_sender,
        expose_link=_exposes_secrets(config),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value, result.value.message)


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=ApiResponse[MessageResponse])
async def reset_password(
    request: ResetPasswordRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set a new password. Requires the bearer token from the reset link.

    Raises:
        - 401 Unauthorized: Missing or invalid bearer token
        - 404 Not Found: Token subject has no account
    """
    result = await ResetPasswordUseCase(uow).execute(request.password, user_id)

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value, result.value.message)


class ChangePasswordRequest(BaseModel):
    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)
    new_password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)


@router.post("/change-password", status_code=status.HTTP_200_OK, response_model=ApiResponse[MessageResponse])
async def change_password(
    request: ChangePasswordRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change the password of the authenticated user.

    Raises:
        - 401 Unauthorized: Missing or invalid bearer token
        - 404 Not Found: Token subject has no account
        - 400 Bad Request: Old password wrong, or new hash equals the stored one
    """
    result = await ChangePasswordUseCase(uow).execute(
        request.password, request.new_password, user_id
    )

    if result.is_err():
        raise_for_error(result.error)

    return success(result.value, result.value.message)
