"""Tests covering security and hardening features."""

from __future__ import annotations

from flask import Flask

from app import create_app
from conftest import BaseTestConfig


def _build_app(**overrides) -> Flask:
    class TestConfig(BaseTestConfig):
        pass

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    return create_app(TestConfig)


def test_cors_allows_configured_origin():
    app = _build_app(CORS_ORIGINS=["https://client.example"])
    client = app.test_client()

    response = client.get(
        "/health", headers={"Origin": "https://client.example"}
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "https://client.example"
    assert response.headers.get("X-Request-ID")


def test_rate_limit_exceeded_returns_json():
    app = _build_app(RATE_LIMIT="2 per minute")
    client = app.test_client()

    client.get("/health")
    client.get("/health")
    response = client.get("/health")

    assert response.status_code == 429
    payload = response.get_json()
    assert payload["error"] == "Too Many Requests"
    assert "request_id" in payload


def test_json_error_shape_for_invalid_request():
    app = _build_app()
    client = app.test_client()

    response = client.post(
        "/auth/register",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert "Request content type" in payload["detail"]
    assert payload["request_id"]


def test_protected_route_without_token_returns_json_401(client):
    response = client.get("/users")

    assert response.status_code == 401
    payload = response.get_json()
    assert payload["error"] == "Unauthorized"
    assert payload["request_id"]


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
