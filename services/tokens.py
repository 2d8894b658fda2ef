"""Signed, time-limited tokens carrying a username subject."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Callable
from uuid import uuid4

import jwt

from .errors import AuthError
from .settings import AuthSettings

EMAIL_VERIFICATION = "email_verification"


class TokenService:
    """Issue and parse HS256 JWTs with the application's secret key.

    Login access tokens minted by flask-jwt-extended use the same key and
    algorithm, so :meth:`parse` accepts both kinds.
    """

    def __init__(
        self,
        settings: AuthSettings,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(
        self,
        subject: str,
        ttl_minutes: int,
        token_type: str = EMAIL_VERIFICATION,
    ) -> str:
        """Return a signed token for ``subject`` that expires after ``ttl_minutes``."""

        now = self._clock()
        claims = {
            "sub": subject,
            "iat": now,
            "exp": now + timedelta(minutes=ttl_minutes),
            "type": token_type,
            "jti": uuid4().hex,
        }
        return jwt.encode(claims, self.settings.secret_key, algorithm=self.settings.algorithm)

    def parse(self, token: object) -> dict[str, Any]:
        """Verify signature and expiry and return the token's claims."""

        if not isinstance(token, str) or not token:
            raise AuthError("Invalid token")
        try:
            claims = jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthError("Invalid token") from exc
        return claims

    def subject(self, token: str | None) -> str:
        return self.parse(token)["sub"]

    def extract_from_authorization_header(self, header_value: str | None) -> str:
        """Strip the configured prefix (``"Bearer "``) from an authorization header."""

        prefix = self.settings.token_prefix
        if not header_value or not header_value.startswith(prefix):
            raise AuthError("Invalid token")
        return header_value[len(prefix):].strip()
