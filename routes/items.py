"""Inventory items blueprint with basic CRUD."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest, Conflict

from models import db
from models.item import Item
from utils.request_validation import (
    parse_json_request,
    parse_non_negative_decimal,
    parse_non_negative_int,
)

items_bp = Blueprint("items", __name__)

_TEXT_FIELDS = ("name", "code", "description")


def _validate_item_payload(data: dict, partial: bool = False):
    errors = []

    if not partial:
        for field in ("name", "code"):
            if not data.get(field):
                errors.append(f"{field} is required")
    else:
        for field in ("name", "code"):
            if field in data and not data.get(field):
                errors.append(f"{field} must not be empty")

    for field in _TEXT_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            errors.append(f"{field} must be a string")

    quantity = parse_non_negative_int(data.get("quantity"), "quantity", errors)
    rate = parse_non_negative_decimal(data.get("rate"), "rate", errors)
    return errors, quantity, rate


def _ensure_code_available(code: str | None, item_id: int | None = None) -> None:
    if not code:
        return
    existing = Item.query.filter_by(code=code).first()
    if existing is not None and existing.id != item_id:
        raise Conflict("An item with that code already exists.")


def _get_item_or_404(item_id: int) -> Item:
    return db.get_or_404(Item, item_id, description="Item not found.")


def _commit() -> None:
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("An item with that code already exists.") from exc


@items_bp.route("", methods=["GET"])
def list_items():
    items = Item.query.order_by(Item.id).all()
    return jsonify({"results": [item.to_dict() for item in items], "count": len(items)})


@items_bp.route("/<int:item_id>", methods=["GET"])
def get_item(item_id: int):
    return jsonify(_get_item_or_404(item_id).to_dict())


@items_bp.route("", methods=["POST"])
@jwt_required()
def create_item():
    """Create an inventory item."""

    data = parse_json_request(request)
    errors, quantity, rate = _validate_item_payload(data)
    if errors:
        raise BadRequest("; ".join(errors))
    _ensure_code_available(data.get("code"))

    item = Item(
        name=data["name"],
        code=data["code"],
        description=data.get("description"),
        quantity=quantity if quantity is not None else 0,
        rate=rate,
    )
    db.session.add(item)
    _commit()

    return jsonify(item.to_dict()), 201


@items_bp.route("/<int:item_id>", methods=["PUT", "PATCH"])
@jwt_required()
def update_item(item_id: int):
    """Replace (PUT) or partially update (PATCH) an item."""

    item = _get_item_or_404(item_id)
    partial = request.method == "PATCH"

    data = parse_json_request(request)
    errors, quantity, rate = _validate_item_payload(data, partial=partial)
    if errors:
        raise BadRequest("; ".join(errors))
    _ensure_code_available(data.get("code"), item_id=item.id)

    for field in _TEXT_FIELDS:
        if field in data or not partial:
            setattr(item, field, data.get(field))

    if quantity is not None:
        item.quantity = quantity
    elif not partial:
        item.quantity = 0

    if rate is not None or "rate" in data or not partial:
        item.rate = rate

    _commit()
    return jsonify(item.to_dict())


@items_bp.route("/<int:item_id>", methods=["DELETE"])
@jwt_required()
def delete_item(item_id: int):
    item = _get_item_or_404(item_id)
    db.session.delete(item)
    db.session.commit()
    return "", 204
