"""User and authority model definitions."""

from datetime import datetime

from werkzeug.security import check_password_hash, generate_password_hash

from . import db


USER_STATUSES = ("unverified", "verified")

user_authorities = db.Table(
    "user_authorities",
    db.Column(
        "user_id",
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "authority_id",
        db.Integer,
        db.ForeignKey("authorities.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Authority(db.Model):
    """A role or permission label granted to users."""

    __tablename__ = "authorities"

    id = db.Column(db.Integer, primary_key=True)
    permission = db.Column(db.String(64), unique=True, nullable=False)

    @classmethod
    def get_or_create(cls, permission: str) -> "Authority":
        """Return the authority for ``permission``, staging a new one if missing."""

        authority = cls.query.filter_by(permission=permission).first()
        if authority is None:
            authority = cls(permission=permission)
            db.session.add(authority)
        return authority

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Authority {self.permission}>"


class User(db.Model):
    """Represents an account holder."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    status = db.Column(
        db.String(16),
        nullable=False,
        default="unverified",
        server_default=db.text("'unverified'"),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    authorities = db.relationship(
        "Authority",
        secondary=user_authorities,
        lazy="selectin",
    )
    email_verifier = db.relationship(
        "EmailVerifier",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def is_verified(self) -> bool:
        return self.status == "verified"

    def set_password(self, password: str, iterations: int = 600000) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(
            password, method=f"pbkdf2:sha256:{iterations}"
        )

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    def mark_verified(self) -> None:
        """Move the account to the terminal verified state."""

        self.status = "verified"

    def has_authority(self, permission: str) -> bool:
        return any(a.permission == permission for a in self.authorities)

    def to_dict(self) -> dict:
        """Public projection of the user; never includes the password hash."""

        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "status": self.status,
            "authorities": sorted(a.permission for a in self.authorities),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.username}>"
