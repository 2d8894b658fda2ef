"""Tests for the verification email backends."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import pytest

from services.mailer import (
    LoggingEmailSender,
    SmtpEmailSender,
    build_email_sender,
)


def test_logging_sender_logs_link(caplog):
    sender = LoggingEmailSender("https://app.example/verify?token={token}")

    with caplog.at_level(logging.INFO, logger="services.mailer"):
        sender.send_verification_email(7, "alice@x.com", "tok123")

    assert "https://app.example/verify?token=tok123" in caplog.text
    assert "alice@x.com" in caplog.text


def test_smtp_message_contains_link():
    sender = SmtpEmailSender(
        "https://app.example/verify?token={token}",
        host="smtp.example",
        sender="noreply@app.example",
    )

    message = sender.build_message("alice@x.com", "tok123")

    assert message["To"] == "alice@x.com"
    assert message["From"] == "noreply@app.example"
    assert "https://app.example/verify?token=tok123" in message.get_content()


def test_smtp_sender_uses_tls_and_login():
    sender = SmtpEmailSender(
        "{token}",
        host="smtp.example",
        port=587,
        username="mailer",
        password="secret",
        use_tls=True,
    )
    smtp = MagicMock()

    with patch("services.mailer.smtplib.SMTP") as smtp_cls:
        smtp_cls.return_value.__enter__.return_value = smtp
        sender.send_verification_email(1, "alice@x.com", "tok123")

    smtp_cls.assert_called_once_with("smtp.example", 587, timeout=10.0)
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("mailer", "secret")
    smtp.send_message.assert_called_once()


def test_build_email_sender_selects_backend():
    console = build_email_sender({"MAIL_BACKEND": "console", "VERIFY_EMAIL_URL": "{token}"})
    smtp = build_email_sender(
        {"MAIL_BACKEND": "SMTP", "MAIL_SERVER": "smtp.example", "MAIL_PORT": "2525"}
    )

    assert isinstance(console, LoggingEmailSender)
    assert isinstance(smtp, SmtpEmailSender)
    assert smtp.port == 2525

    with pytest.raises(ValueError):
        build_email_sender({"MAIL_BACKEND": "fax"})
