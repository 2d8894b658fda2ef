"""Authentication blueprint: registration, login and email verification."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required

from services import get_user_manager
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new, unverified account and mail its verification link."""
    payload = parse_json_request(request)
    user = get_user_manager().register(
        payload.get("username"),
        payload.get("password"),
        payload.get("email"),
    )
    return (
        jsonify({"message": "User registered successfully.", "user": user}),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a JWT access token."""
    payload = parse_json_request(request, required_keys=("username", "password"))
    user = get_user_manager().authenticate(payload.get("username"), payload.get("password"))

    token = create_access_token(identity=user.username)
    return jsonify({"access_token": token, "user": user.to_dict()}), HTTPStatus.OK


@auth_bp.route("/verify-email", methods=["GET", "POST"])
def verify_email() -> tuple:
    """Consume an email verification token from the link or a JSON body."""
    if request.method == "GET":
        token = request.args.get("token")
    else:
        token = parse_json_request(request, required_keys=("token",)).get("token")

    user = get_user_manager().verify_email(token)
    return jsonify({"message": "Email verified.", "user": user}), HTTPStatus.OK


@auth_bp.route("/resend-verification", methods=["POST"])
@jwt_required()
def resend_verification() -> tuple:
    """Issue a new verification token for the signed-in user."""
    manager = get_user_manager()
    current = manager.find_user_by_username(get_jwt_identity())
    user = manager.resend_verification(current.id)
    return jsonify({"message": "Verification email sent.", "user": user}), HTTPStatus.OK
