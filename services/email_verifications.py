"""Persistence helpers for pending email verifications."""

from __future__ import annotations

from models import db
from models.email_verifier import EmailVerifier


class EmailVerificationStore:
    """Stage reads and writes of :class:`EmailVerifier` rows in the current session.

    Nothing here commits; the caller owns the transaction.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def create(self, user_id: int, email: str, token: str) -> EmailVerifier:
        verifier = EmailVerifier(user_id=user_id, email=email, token=token)
        self.session.add(verifier)
        return verifier

    def find_by_token(self, token: str) -> EmailVerifier | None:
        return self.session.query(EmailVerifier).filter_by(token=token).first()

    def find_by_user_id(self, user_id: int) -> EmailVerifier | None:
        return self.session.query(EmailVerifier).filter_by(user_id=user_id).first()

    def delete(self, verifier: EmailVerifier) -> None:
        self.session.delete(verifier)
