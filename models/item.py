"""Inventory item model."""

from datetime import datetime
from decimal import Decimal

from . import db


class Item(db.Model):
    """A stocked inventory item."""

    __tablename__ = "items"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    code = db.Column(db.String(64), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    rate = db.Column(db.Numeric(10, 2), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self) -> dict:
        """Serialize the item to a dictionary."""

        rate = float(self.rate) if isinstance(self.rate, Decimal) else self.rate
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "description": self.description,
            "quantity": self.quantity,
            "rate": rate,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
