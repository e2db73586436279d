from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from boutique_pos.money import money_str
from boutique_pos.time_utils import to_utc_z


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    MOBILE = "mobile"
    PETTY_CASH = "petty-cash"


@dataclass(frozen=True)
class CartItem:
    """
    Cart line with the product name and price captured at add-time.

    WHY: Finalized transactions keep these snapshots, so reporting does not
    depend on the mutable (or deleted) catalog entry.
    """
    id: str
    product_id: str
    name: str
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "name": self.name,
            "price": money_str(self.price),
            "quantity": self.quantity,
            "line_total": money_str(self.line_total),
        }


@dataclass(frozen=True)
class Transaction:
    """Completed sale. Never mutated once created."""
    id: str
    items: tuple[CartItem, ...]
    total: Decimal
    payment_method: PaymentMethod
    timestamp: datetime
    cashier_id: str
    cashier_name: str
    amount_received: Decimal | None = None
    change: Decimal | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "items": [item.to_dict() for item in self.items],
            "total": money_str(self.total),
            "payment_method": self.payment_method.value,
            "timestamp": to_utc_z(self.timestamp),
            "cashier_id": self.cashier_id,
            "cashier_name": self.cashier_name,
            "amount_received": money_str(self.amount_received) if self.amount_received is not None else None,
            "change": money_str(self.change) if self.change is not None else None,
        }
