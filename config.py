"""Application configuration module."""

import os
from datetime import timedelta


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "y"}


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///stockroom.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # JWT
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ALGORITHM = "HS256"
    JWT_HEADER_NAME = os.getenv("JWT_HEADER_NAME", "Authorization")
    JWT_HEADER_TYPE = os.getenv("JWT_HEADER_TYPE", "Bearer")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.getenv("ACCESS_TOKEN_EXPIRATION_MINUTES", "60"))
    )

    # Accounts
    EMAIL_TOKEN_EXPIRATION_MINUTES = int(
        os.getenv("EMAIL_TOKEN_EXPIRATION_MINUTES", "30")
    )
    PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "600000"))
    USERNAME_MIN_LENGTH = 6
    USERNAME_MAX_LENGTH = 64
    PASSWORD_MIN_LENGTH = 8
    DEFAULT_AUTHORITY = os.getenv("DEFAULT_AUTHORITY", "ROLE_TRAINEE")
    ADMIN_AUTHORITY = os.getenv("ADMIN_AUTHORITY", "ROLE_ADMIN")

    # Mail
    MAIL_BACKEND = os.getenv("MAIL_BACKEND", "console")
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "25"))
    MAIL_USE_TLS = _env_bool("MAIL_USE_TLS")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "no-reply@stockroom.local")
    VERIFY_EMAIL_URL = os.getenv(
        "VERIFY_EMAIL_URL", "http://localhost:5000/auth/verify-email?token={token}"
    )

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "60 per minute")
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")
