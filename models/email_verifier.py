"""Pending email verification model."""

from datetime import datetime

from . import db


class EmailVerifier(db.Model):
    """An outstanding email-confirmation challenge for a single user.

    The token column holds the same signed token that is mailed to the user, so
    expiry is carried by the token's own ``exp`` claim.
    """

    __tablename__ = "email_verifiers"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    email = db.Column(db.String(255), nullable=False)
    token = db.Column(db.String(512), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", back_populates="email_verifier")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<EmailVerifier user={self.user_id}>"
