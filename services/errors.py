"""Error kinds raised by the account services.

Each kind maps onto a Werkzeug HTTP exception so the application's JSON error
handler renders it with the matching status code.
"""

from __future__ import annotations

from werkzeug.exceptions import BadRequest, NotFound, Unauthorized


class ValidationError(BadRequest):
    """Bad input: short or missing credentials, duplicate username or email."""

    def __init__(self, description: str, errors: list[str] | None = None):
        super().__init__(description)
        self.errors = errors if errors is not None else [description]


class AuthError(Unauthorized):
    """Missing, malformed, invalid or expired token, or bad credentials."""


class NotFoundError(NotFound):
    """The requested user does not exist."""
