"""Application factory."""

import json
import logging
import os
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from routes.auth import auth_bp
from routes.items import items_bp
from routes.users import users_bp
from services import EXTENSION_KEY, AuthSettings, UserLifecycleManager, build_email_sender
from services.mailer import EmailSender
from services.tokens import EMAIL_VERIFICATION

migrate = Migrate()
jwt_manager = JWTManager()


def create_app(
    config_class: type[Config] = Config,
    email_sender: EmailSender | None = None,
) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt_manager.init_app(app)

    # Account services share one immutable settings object
    settings = AuthSettings.from_config(app.config)
    sender = email_sender or build_email_sender(app.config)
    app.extensions[EXTENSION_KEY] = UserLifecycleManager(settings, sender)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "60 per minute")],
        storage_uri=app.config.get("RATELIMIT_STORAGE_URI", "memory://"),
        headers_enabled=app.config.get("RATELIMIT_HEADERS_ENABLED", True),
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(items_bp, url_prefix="/items")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)

    return app


def _error_response(status: int, error: str, detail: str):
    request_id = g.get("request_id") or str(uuid.uuid4())
    payload = {"error": error, "detail": detail, "request_id": request_id}
    response = jsonify(payload)
    response.status_code = status
    response.headers.setdefault("X-Request-ID", request_id)
    return response


@jwt_manager.unauthorized_loader
def _missing_token(reason: str):
    return _error_response(401, "Unauthorized", reason)


@jwt_manager.invalid_token_loader
def _invalid_token(reason: str):
    return _error_response(401, "Unauthorized", "Invalid token")


@jwt_manager.expired_token_loader
def _expired_token(jwt_header: dict, jwt_payload: dict):
    return _error_response(401, "Unauthorized", "Token expired")


@jwt_manager.token_verification_loader
def _reject_email_tokens(jwt_header: dict, jwt_payload: dict) -> bool:
    return jwt_payload.get("type") != EMAIL_VERIFICATION


@jwt_manager.token_verification_failed_loader
def _rejected_token(jwt_header: dict, jwt_payload: dict):
    return _error_response(401, "Unauthorized", "Invalid token")


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        errors = getattr(error, "errors", None)
        if errors:
            payload["errors"] = list(errors)
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        app.logger.exception("Unhandled application error", exc_info=error)
        return _error_response(500, "Internal Server Error", "An unexpected error occurred.")


if __name__ == "__main__":
    application = create_app()
    logging.basicConfig(level=application.config.get("LOG_LEVEL", "INFO"))
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
