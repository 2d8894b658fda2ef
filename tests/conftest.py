"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from services import get_user_manager  # noqa: E402
from services.mailer import EmailSender  # noqa: E402


class BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-for-hs256"
    PASSWORD_HASH_ITERATIONS = 1000
    RATE_LIMIT = "1000 per minute"
    MAIL_BACKEND = "console"


class RecordingEmailSender(EmailSender):
    """Keeps every verification email in memory instead of sending it."""

    def __init__(self):
        super().__init__("https://example.com/verify?token={token}")
        self.sent: list[dict] = []
        self.fail = False

    def send_verification_email(self, user_id: int, email: str, token: str) -> None:
        if self.fail:
            raise ConnectionError("SMTP relay unavailable")
        self.sent.append({"user_id": user_id, "email": email, "token": token})

    @property
    def last_token(self) -> str:
        return self.sent[-1]["token"]


@pytest.fixture()
def mailer() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture()
def app(mailer: RecordingEmailSender) -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(BaseTestConfig, email_sender=mailer)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def manager(app: Flask):
    """Return the lifecycle manager inside an active application context."""

    with app.app_context():
        yield get_user_manager()
