"""Outbound verification email backends."""

from __future__ import annotations

import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class EmailSender(ABC):
    """Interface for delivering verification links."""

    def __init__(self, verify_url: str = "{token}"):
        self.verify_url = verify_url

    def verification_link(self, token: str) -> str:
        return self.verify_url.format(token=token)

    @abstractmethod
    def send_verification_email(self, user_id: int, email: str, token: str) -> None:
        """Deliver the verification link for ``token`` to ``email``."""


class LoggingEmailSender(EmailSender):
    """Write the verification link to the log instead of sending mail."""

    def send_verification_email(self, user_id: int, email: str, token: str) -> None:
        logger.info(
            "[VERIFICATION] user=%s email=%s link=%s",
            user_id,
            email,
            self.verification_link(token),
        )


class SmtpEmailSender(EmailSender):
    """Send verification links through an SMTP relay."""

    def __init__(
        self,
        verify_url: str,
        host: str,
        port: int = 25,
        sender: str = "no-reply@stockroom.local",
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = False,
        timeout: float = 10.0,
    ):
        super().__init__(verify_url)
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, email: str, token: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = "Confirm your email address"
        message["From"] = self.sender
        message["To"] = email
        message.set_content(
            "Welcome!\n\n"
            "Please confirm your email address by opening the link below:\n\n"
            f"{self.verification_link(token)}\n"
        )
        return message

    def send_verification_email(self, user_id: int, email: str, token: str) -> None:
        message = self.build_message(email, token)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(message)
        logger.info("Verification email sent to user %s", user_id)


def build_email_sender(config: Mapping[str, Any]) -> EmailSender:
    """Return the email backend selected by ``MAIL_BACKEND``."""

    backend = (config.get("MAIL_BACKEND") or "console").strip().lower()
    verify_url = config.get("VERIFY_EMAIL_URL", "{token}")

    if backend == "console":
        return LoggingEmailSender(verify_url)
    if backend == "smtp":
        return SmtpEmailSender(
            verify_url,
            host=config.get("MAIL_SERVER", "localhost"),
            port=int(config.get("MAIL_PORT", 25)),
            sender=config.get("MAIL_DEFAULT_SENDER", "no-reply@stockroom.local"),
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            use_tls=bool(config.get("MAIL_USE_TLS", False)),
        )
    raise ValueError(f"Unknown MAIL_BACKEND: {backend!r}")
