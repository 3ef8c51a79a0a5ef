import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapter.services.local_upload_storage import LocalUploadStorage
from src.adapter.services.smtp_email_sender import SmtpEmailSender
from src.app.errors import ErrorCode, StorageError
from src.app.services.otp_service import OtpPolicy
from src.app.services.token_service import TokenIssuer, TokenSettings
from src.libs.result import Error
from .error import ClientError, ServerError, classify_storage_error
from .response import fail
from .utils.log_config import configure_logging, log_requests

import src.domain.entities  # noqa: F401  (registers tables on SQLModel.metadata)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal Server Error"


def _is_production(request: Request) -> bool:
    return request.app.state.config.ENVIRONMENT == "production"


async def handle_client_error(request: Request, exc: ClientError):
    error = exc.base_error
    logger.warning(f"Client error: {error.code} - {error.message}")
    return fail(error, exc.status_code)


async def handle_server_error(request: Request, exc: ServerError):
    error = exc.base_error
    logger.error(f"Server error: {error.code} - {error.message}")
    message = GENERIC_SERVER_ERROR if _is_production(request) else error.message
    return fail(error, status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def handle_storage_error(request: Request, exc: StorageError):
    classified = classify_storage_error(exc)
    if isinstance(classified, ClientError):
        return await handle_client_error(request, classified)
    return await handle_server_error(request, classified)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    error = Error(ErrorCode.VALIDATION_ERROR, ", ".join(messages))
    logger.warning(f"Validation error: {error.message}")
    return fail(error, status.HTTP_400_BAD_REQUEST)


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = Error(ErrorCode.NOT_FOUND, f"Cannot find {request.url.path} on this server!")
    else:
        error = Error(str(exc.status_code), str(exc.detail))
    return fail(error, exc.status_code)


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = GENERIC_SERVER_ERROR if _is_production(request) else str(exc)
    return fail(
        Error(ErrorCode.INTERNAL_ERROR, message),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)

    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Connected to the database")
        logger.info(f"Environment: {ApplicationConfig.ENVIRONMENT}")
        yield
        await engine.dispose()
        logger.info("Database connection closed gracefully")

    app = FastAPI(title="Auth Service", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.engine = engine
    app.state.session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    app.state.token_issuer = TokenIssuer(
        TokenSettings(
            access_secret=ApplicationConfig.JWT_SECRET,
            refresh_secret=ApplicationConfig.JWT_REFRESH_SECRET,
            issuer=ApplicationConfig.JWT_ISSUER,
            audience=ApplicationConfig.JWT_AUDIENCE,
            access_expires=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_expires=timedelta(minutes=ApplicationConfig.REFRESH_TOKEN_EXPIRE_MINUTES),
        )
    )
    app.state.otp_policy = OtpPolicy(
        expires=timedelta(minutes=ApplicationConfig.OTP_EXPIRE_MINUTES),
        rate_limit_window=timedelta(minutes=ApplicationConfig.OTP_RATE_LIMIT_WINDOW_MINUTES),
        max_per_window=ApplicationConfig.OTP_MAX_PER_WINDOW,
    )
    app.state.upload_storage = LocalUploadStorage(
        ApplicationConfig.UPLOAD_DIR, ApplicationConfig.BASE_URL
    )
    app.state.email_sender = None
    if ApplicationConfig.EMAIL_ENABLED:
        app.state.email_sender = SmtpEmailSender(
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            from_email=ApplicationConfig.FROM_EMAIL,
            app_name=ApplicationConfig.APP_NAME,
            username=ApplicationConfig.SMTP_USER,
            password=ApplicationConfig.SMTP_PASS,
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from src.api.routes import admin, auth, health_check

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, prefix=prefix, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.mount(
        "/uploads",
        StaticFiles(directory=ApplicationConfig.UPLOAD_DIR),
        name="uploads",
    )

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(StorageError, handle_storage_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
