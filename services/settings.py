"""Immutable account and token settings derived from the Flask config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class AuthSettings:
    """Values the account services need, captured once at application start."""

    secret_key: str
    algorithm: str = "HS256"
    header_name: str = "Authorization"
    header_type: str = "Bearer"
    email_token_expiration_minutes: int = 30
    password_hash_iterations: int = 600000
    username_min_length: int = 6
    username_max_length: int = 64
    password_min_length: int = 8
    default_authority: str = "ROLE_TRAINEE"
    admin_authority: str = "ROLE_ADMIN"

    @property
    def token_prefix(self) -> str:
        return f"{self.header_type} " if self.header_type else ""

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AuthSettings":
        """Build settings from a Flask config mapping."""

        secret = config.get("JWT_SECRET_KEY") or config.get("SECRET_KEY")
        if not secret:
            raise RuntimeError("JWT_SECRET_KEY or SECRET_KEY must be configured.")

        return cls(
            secret_key=secret,
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            header_name=config.get("JWT_HEADER_NAME", "Authorization"),
            header_type=config.get("JWT_HEADER_TYPE", "Bearer"),
            email_token_expiration_minutes=int(
                config.get("EMAIL_TOKEN_EXPIRATION_MINUTES", 30)
            ),
            password_hash_iterations=int(config.get("PASSWORD_HASH_ITERATIONS", 600000)),
            username_min_length=int(config.get("USERNAME_MIN_LENGTH", 6)),
            username_max_length=int(config.get("USERNAME_MAX_LENGTH", 64)),
            password_min_length=int(config.get("PASSWORD_MIN_LENGTH", 8)),
            default_authority=config.get("DEFAULT_AUTHORITY", "ROLE_TRAINEE"),
            admin_authority=config.get("ADMIN_AUTHORITY", "ROLE_ADMIN"),
        )
