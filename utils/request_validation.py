"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON object body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if data.get(key) in (None, "")]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(", ".join(sorted(missing)))
            )

    return data


def parse_non_negative_int(value: object, field: str, errors: list[str]) -> int | None:
    """Coerce ``value`` to an int >= 0, recording a message in ``errors`` on failure."""

    if value in (None, ""):
        return None
    if isinstance(value, bool):
        errors.append(f"{field} must be an integer")
        return None
    try:
        number = int(str(value))
    except (TypeError, ValueError):
        errors.append(f"{field} must be an integer")
        return None
    if number < 0:
        errors.append(f"{field} must not be negative")
        return None
    return number


def parse_non_negative_decimal(
    value: object, field: str, errors: list[str]
) -> Decimal | None:
    """Coerce ``value`` to a Decimal >= 0, recording a message in ``errors`` on failure."""

    if value in (None, ""):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, TypeError):
        errors.append(f"{field} must be numeric")
        return None
    if not number.is_finite() or number < 0:
        errors.append(f"{field} must be a non-negative number")
        return None
    return number
