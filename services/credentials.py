"""Username, email and password rules applied before an account is written."""

from __future__ import annotations

from models.user import User

from .errors import ValidationError
from .settings import AuthSettings

EMAIL_MAX_LENGTH = 255


class CredentialValidator:
    """Independent checks for registration input.

    Each check raises :class:`ValidationError` on the first rule it breaks and
    performs at most one read query. Values that are not strings break the
    rule they were given for. Database unique constraints remain the
    authoritative guard against duplicates.
    """

    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def check_username(self, username: object) -> None:
        minimum = self.settings.username_min_length
        maximum = self.settings.username_max_length
        if not isinstance(username, str) or len(username) < minimum:
            raise ValidationError(f"Username cannot be less than {minimum} characters")
        if len(username) > maximum:
            raise ValidationError(f"Username cannot be more than {maximum} characters")

        if User.query.filter_by(username=username).first() is not None:
            raise ValidationError("Username already exists")

    def check_email(self, email: object) -> None:
        if not isinstance(email, str) or not email or len(email) > EMAIL_MAX_LENGTH:
            raise ValidationError("Please input a valid email address")

        if User.query.filter_by(email=email).first() is not None:
            raise ValidationError("This email has been used")

    def check_password(self, password: object) -> None:
        minimum = self.settings.password_min_length
        if not isinstance(password, str) or len(password) < minimum:
            raise ValidationError(f"Password cannot be less than {minimum} characters")

    def check_all(self, username: object, password: object, email: object) -> None:
        """Run every registration check, stopping at the first violation."""

        self.check_username(username)
        self.check_email(email)
        self.check_password(password)
