"""Database initialization and model exports."""

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

# Import models to register them with SQLAlchemy metadata.
from .user import Authority, User  # noqa: E402,F401
from .email_verifier import EmailVerifier  # noqa: E402,F401
from .item import Item  # noqa: E402,F401

__all__ = [
    "db",
    "Authority",
    "User",
    "EmailVerifier",
    "Item",
]
