"""Builders shared by the report and receipt tests."""

from datetime import datetime
from decimal import Decimal

from boutique_pos.models import CartItem, Identity, PaymentMethod, Transaction


CASHIER = Identity(id="2", name="Cashier User", email="cashier@boutique.com", role="cashier")


def make_transaction(
    *,
    total,
    method=PaymentMethod.CASH,
    timestamp=datetime(2024, 3, 1, 12, 0),
    cashier=("1", "Admin User"),
    items=None,
    txn_id="t",
    amount_received=None,
):
    """Build a completed Transaction directly (no cart)."""
    total = Decimal(str(total))
    if items is None:
        items = [("p-1", "Item", total, 1)]
    lines = tuple(
        CartItem(id=f"{txn_id}-{i}", product_id=pid, name=name, price=Decimal(str(price)), quantity=qty)
        for i, (pid, name, price, qty) in enumerate(items)
    )
    received = Decimal(str(amount_received)) if amount_received is not None else None
    return Transaction(
        id=txn_id,
        items=lines,
        total=total,
        payment_method=PaymentMethod(method),
        timestamp=timestamp,
        cashier_id=cashier[0],
        cashier_name=cashier[1],
        amount_received=received,
        change=received - total if received is not None else None,
    )
