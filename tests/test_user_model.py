"""Tests for the User model helpers."""

from models import db
from models.user import Authority, User


def test_user_defaults_and_verification(app):
    """New users start unverified and move to verified."""

    with app.app_context():
        user = User(username="helper01", email="helper@example.com")
        user.set_password("password123", iterations=1000)
        db.session.add(user)
        db.session.commit()

        assert user.status == "unverified"
        assert user.is_verified is False
        assert user.password_hash != "password123"
        assert user.password_hash.startswith("pbkdf2:sha256:1000$")
        assert user.check_password("password123") is True
        assert user.check_password("wrong-password") is False

        user.mark_verified()
        db.session.commit()
        db.session.refresh(user)

        assert user.status == "verified"
        assert user.is_verified is True


def test_to_dict_hides_password_hash(app):
    with app.app_context():
        user = User(username="helper01", email="helper@example.com")
        user.set_password("password123", iterations=1000)
        user.authorities = [Authority(permission="ROLE_TRAINEE"), Authority(permission="ROLE_ADMIN")]
        db.session.add(user)
        db.session.commit()

        payload = user.to_dict()

        assert "password_hash" not in payload
        assert "password" not in payload
        assert payload["authorities"] == ["ROLE_ADMIN", "ROLE_TRAINEE"]
        assert user.has_authority("ROLE_ADMIN") is True
        assert user.has_authority("ROLE_OWNER") is False


def test_authority_get_or_create_reuses_rows(app):
    with app.app_context():
        first = Authority.get_or_create("ROLE_TRAINEE")
        db.session.commit()
        second = Authority.get_or_create("ROLE_TRAINEE")

        assert first.id == second.id
        assert Authority.query.count() == 1
