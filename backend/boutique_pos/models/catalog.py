from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from boutique_pos.money import money_str, to_money
from boutique_pos.time_utils import parse_iso_datetime, to_utc_z, utcnow


@dataclass
class Category:
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(id=str(data["id"]), name=data["name"])


@dataclass
class Product:
    """
    Sellable catalog item.

    `category` holds a Category id. Deleting the category leaves the
    reference dangling; readers must tolerate unknown ids.
    """
    id: str
    name: str
    price: Decimal
    stock: int = 0
    description: str = ""
    category: str = ""
    barcode: str | None = None
    image_url: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": money_str(self.price),
            "stock": self.stock,
            "category": self.category,
            "barcode": self.barcode,
            "image_url": self.image_url,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description") or "",
            price=to_money(data["price"]),
            stock=int(data.get("stock") or 0),
            category=str(data.get("category") or ""),
            barcode=data.get("barcode"),
            image_url=data.get("image_url"),
            created_at=parse_iso_datetime(data.get("created_at")) or utcnow(),
            updated_at=parse_iso_datetime(data.get("updated_at")) or utcnow(),
        )
