"""User management blueprint."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from werkzeug.exceptions import Forbidden

from models.user import User
from services import get_user_manager

users_bp = Blueprint("users", __name__)


def _current_user() -> User:
    return get_user_manager().find_user_by_username(get_jwt_identity())


@users_bp.route("", methods=["GET"])
@jwt_required()
def list_users():
    users = get_user_manager().get_all()
    return jsonify({"results": users, "count": len(users)})


@users_bp.route("/me", methods=["GET"])
@jwt_required()
def get_me():
    """Resolve the caller from the raw authorization header."""
    return jsonify(get_user_manager().get_by_authorization_header(request.headers))


@users_bp.route("/<int:user_id>", methods=["GET"])
@jwt_required()
def get_user(user_id: int):
    return jsonify(get_user_manager().get_one(user_id))


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@jwt_required()
def delete_user(user_id: int):
    """Delete an account. Admins may delete anyone; users only themselves."""
    manager = get_user_manager()
    caller = _current_user()
    if caller.id != user_id and not caller.has_authority(manager.settings.admin_authority):
        raise Forbidden("You do not have permission to delete this user.")

    manager.delete(user_id)
    return "", HTTPStatus.NO_CONTENT
