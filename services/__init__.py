"""Account services shared by the HTTP blueprints."""

from flask import current_app

from .credentials import CredentialValidator
from .email_verifications import EmailVerificationStore
from .errors import AuthError, NotFoundError, ValidationError
from .mailer import EmailSender, LoggingEmailSender, SmtpEmailSender, build_email_sender
from .settings import AuthSettings
from .tokens import TokenService
from .users import UserLifecycleManager

EXTENSION_KEY = "user_manager"


def get_user_manager() -> UserLifecycleManager:
    """Return the lifecycle manager registered on the current application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "AuthError",
    "AuthSettings",
    "CredentialValidator",
    "EmailSender",
    "EmailVerificationStore",
    "LoggingEmailSender",
    "NotFoundError",
    "SmtpEmailSender",
    "TokenService",
    "UserLifecycleManager",
    "ValidationError",
    "build_email_sender",
    "get_user_manager",
]
