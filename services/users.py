"""User lifecycle: registration, lookup, deletion and email verification.

Account states (forward only)::

    unverified --verify_email--> verified

A user may be deleted from either state; deletion also removes any pending
email verifier. Every mutating operation commits once and rolls back the whole
session on failure. The verification email is sent after the commit and its
failure never undoes the registration.
"""

from __future__ import annotations

import logging
from typing import Mapping

from sqlalchemy.exc import IntegrityError

from models import db
from models.user import Authority, User

from .credentials import CredentialValidator
from .email_verifications import EmailVerificationStore
from .errors import AuthError, NotFoundError, ValidationError
from .mailer import EmailSender
from .settings import AuthSettings
from .tokens import TokenService

logger = logging.getLogger(__name__)


def _normalize_email(raw_email: object) -> object:
    if not isinstance(raw_email, str):
        return raw_email
    return raw_email.strip().lower()


class UserLifecycleManager:
    """Compose validation, tokens and verifier storage into account workflows."""

    def __init__(
        self,
        settings: AuthSettings,
        email_sender: EmailSender,
        session=None,
    ):
        self.settings = settings
        self.email_sender = email_sender
        self.session = session if session is not None else db.session
        self.validator = CredentialValidator(settings)
        self.tokens = TokenService(settings)
        self.verifications = EmailVerificationStore(self.session)

    # Lookups

    def find_user_by_id(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("Cannot find the user")
        return user

    def find_user_by_username(self, username: str) -> User:
        user = self.session.query(User).filter_by(username=username).first()
        if user is None:
            raise NotFoundError("Cannot find the user")
        return user

    def get_all(self) -> list[dict]:
        users = self.session.query(User).order_by(User.id).all()
        return [user.to_dict() for user in users]

    def get_one(self, user_id: int) -> dict:
        return self.find_user_by_id(user_id).to_dict()

    def get_by_token(self, token: str) -> dict:
        username = self.tokens.subject(token)
        return self.find_user_by_username(username).to_dict()

    def get_by_authorization_header(self, headers: Mapping[str, str]) -> dict:
        header_value = headers.get(self.settings.header_name)
        token = self.tokens.extract_from_authorization_header(header_value)
        return self.get_by_token(token)

    def authenticate(self, username: str | None, password: str | None) -> User:
        """Return the user owning these credentials."""

        user = None
        if isinstance(username, str) and username:
            user = self.session.query(User).filter_by(username=username).first()
        if (
            user is None
            or not isinstance(password, str)
            or not password
            or not user.check_password(password)
        ):
            raise AuthError("Invalid username or password")
        return user

    # Workflows

    def register(self, username: str | None, password: str | None, email: str | None) -> dict:
        """Create an unverified account and send its verification email."""

        email = _normalize_email(email)
        self.validator.check_all(username, password, email)

        user = User(username=username, email=email, status="unverified")
        user.set_password(password, iterations=self.settings.password_hash_iterations)
        token = self.tokens.issue(username, self.settings.email_token_expiration_minutes)

        try:
            user.authorities = [Authority.get_or_create(self.settings.default_authority)]
            self.session.add(user)
            self.session.flush()
            self.verifications.create(user.id, email, token)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValidationError("User already exists") from exc
        except Exception:
            self.session.rollback()
            raise

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        self._dispatch_verification(user.id, email, token)
        return user.to_dict()

    def verify_email(self, token: str | None) -> dict:
        """Consume a verification token and mark its user verified.

        Presenting a still-recorded token for a user that is already verified
        succeeds without another state change.
        """

        username = self.tokens.subject(token)
        user = self.find_user_by_username(username)

        verifier = self.verifications.find_by_token(token)
        if verifier is None or verifier.user_id != user.id:
            raise AuthError("Invalid token")

        try:
            if not user.is_verified:
                user.mark_verified()
            self.verifications.delete(verifier)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Verified email for user %s (id=%s)", user.username, user.id)
        return user.to_dict()

    def resend_verification(self, user_id: int) -> dict:
        """Replace the pending verifier with a fresh token and mail it again."""

        user = self.find_user_by_id(user_id)
        if user.is_verified:
            raise ValidationError("Email address is already verified")

        token = self.tokens.issue(user.username, self.settings.email_token_expiration_minutes)
        try:
            existing = self.verifications.find_by_user_id(user.id)
            if existing is not None:
                self.verifications.delete(existing)
                self.session.flush()
            self.verifications.create(user.id, user.email, token)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self._dispatch_verification(user.id, user.email, token)
        return user.to_dict()

    def delete(self, user_id: int) -> None:
        """Delete a user together with any pending verifier."""

        user = self.find_user_by_id(user_id)
        try:
            verifier = self.verifications.find_by_user_id(user.id)
            if verifier is not None:
                self.verifications.delete(verifier)
            self.session.delete(user)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Deleted user id=%s", user_id)

    def _dispatch_verification(self, user_id: int, email: str, token: str) -> None:
        try:
            self.email_sender.send_verification_email(user_id, email, token)
        except Exception:
            # The account is already committed; resending is the recovery path.
            logger.exception("Failed to send verification email to user %s", user_id)
