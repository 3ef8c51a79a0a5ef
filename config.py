import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./app.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENVIRONMENT = data.get("ENVIRONMENT", "dev")
    BASE_URL = data.get("BASE_URL", "http://localhost:8000")

    # Tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_REFRESH_SECRET = data.get(
        "JWT_REFRESH_SECRET", "dev-refresh-secret-key-change-in-production"
    )
    JWT_ISSUER = data.get("JWT_ISSUER", "auth-service")
    JWT_AUDIENCE = data.get("JWT_AUDIENCE", "auth-service-client")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 10))
    REFRESH_TOKEN_EXPIRE_MINUTES = int(data.get("REFRESH_TOKEN_EXPIRE_MINUTES", 20))

    # One-time passcodes
    OTP_EXPIRE_MINUTES = int(data.get("OTP_EXPIRE_MINUTES", 10))
    OTP_RATE_LIMIT_WINDOW_MINUTES = int(data.get("OTP_RATE_LIMIT_WINDOW_MINUTES", 60))
    OTP_MAX_PER_WINDOW = int(data.get("OTP_MAX_PER_WINDOW", 3))

    # Profile uploads
    UPLOAD_DIR = data.get("UPLOAD_DIR", os.path.join(ROOT_PATH, "uploads"))
    MAX_PROFILE_IMAGE_BYTES = int(data.get("MAX_PROFILE_IMAGE_BYTES", 1024 * 1024))

    # Email
    EMAIL_ENABLED = bool(data.get("EMAIL_ENABLED", False))
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER")
    SMTP_PASS = data.get("SMTP_PASS")
    FROM_EMAIL = data.get("FROM_EMAIL", "no-reply@example.com")
    APP_NAME = data.get("APP_NAME", "Auth Service")

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
