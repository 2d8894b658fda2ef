"""Seed a verified administrator account."""

import os

from app import create_app
from models import db
from models.user import Authority, User
from services import get_user_manager

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def main() -> None:
    app = create_app()
    with app.app_context():
        settings = get_user_manager().settings
        admin = User.query.filter_by(username=ADMIN_USERNAME).first()
        if admin is None:
            admin = User(username=ADMIN_USERNAME, email=ADMIN_EMAIL)
            db.session.add(admin)
            action = "created"
        else:
            admin.email = ADMIN_EMAIL
            action = "updated"

        admin.mark_verified()
        admin.set_password(ADMIN_PASSWORD, iterations=settings.password_hash_iterations)
        admin.authorities = [
            Authority.get_or_create(settings.admin_authority),
            Authority.get_or_create(settings.default_authority),
        ]
        verifier = admin.email_verifier
        if verifier is not None:
            db.session.delete(verifier)
        db.session.commit()
        print(f"Admin user {action}: {ADMIN_USERNAME} <{ADMIN_EMAIL}>")


if __name__ == "__main__":
    main()
