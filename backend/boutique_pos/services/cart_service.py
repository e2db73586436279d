# Overview: Service-layer operations for the cart and checkout; validates against catalog stock.

"""
Cart / Checkout Engine

WHY: The cart owns its line items until checkout. Checkout hands an
immutable snapshot of those lines to a new Transaction, decrements catalog
stock and clears the cart in one synchronous step.

Stock decrements at checkout clamp at zero (see CatalogStore.update_stock)
instead of rejecting the sale; stock is only validated when lines are added
or changed.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Callable

from ..models import CartItem, Identity, PaymentMethod, Transaction
from ..money import ZERO, parse_amount, to_money
from ..time_utils import utcnow
from .catalog_service import CatalogStore
from .session_service import SessionService

logger = logging.getLogger(__name__)


class CartError(Exception):
    """Raised for cart and checkout validation failures. Cart state is unchanged."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


def _parse_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise CartError("Quantity must be a whole number", details={"quantity": quantity})
    if quantity < 1:
        raise CartError("Quantity must be at least 1", details={"quantity": quantity})
    return quantity


def _parse_payment_method(method) -> PaymentMethod:
    try:
        return PaymentMethod(method)
    except ValueError:
        raise CartError("Unknown payment method", details={"payment_method": method})


class Cart:
    def __init__(
        self,
        catalog: CatalogStore,
        session: SessionService | None = None,
        *,
        clock: Callable = utcnow,
    ):
        self.catalog = catalog
        self.session = session
        self.clock = clock
        self._items: list[CartItem] = []
        self._transactions: list[Transaction] = []

    def close(self) -> None:
        self._items = []

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Append-only log of completed sales, oldest first."""
        return tuple(self._transactions)

    def _find(self, item_id: str) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def add_item(self, product_id: str, quantity: int = 1) -> CartItem:
        """
        Add `quantity` of a product, merging into its existing line.

        Raises CartError if the product is unknown or the merged quantity
        would exceed the product's current stock.
        """
        quantity = _parse_quantity(quantity)

        product = self.catalog.get_product_by_id(product_id)
        if product is None:
            raise CartError("Product not found", details={"product_id": product_id})

        existing_index = None
        for index, item in enumerate(self._items):
            if item.product_id == product_id:
                existing_index = index
                break

        in_cart = self._items[existing_index].quantity if existing_index is not None else 0
        if in_cart + quantity > product.stock:
            logger.warning(
                "Rejected add of %s x%d: %d in cart, %d in stock",
                product_id, quantity, in_cart, product.stock,
            )
            raise CartError(
                f"Only {product.stock} items available in stock",
                details={
                    "product_id": product_id,
                    "requested_quantity": in_cart + quantity,
                    "stock": product.stock,
                },
            )

        if existing_index is not None:
            line = replace(self._items[existing_index], quantity=in_cart + quantity)
            self._items[existing_index] = line
        else:
            line = CartItem(
                id=str(uuid.uuid4()),
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=quantity,
            )
            self._items.append(line)
        return line

    def update_quantity(self, item_id: str, quantity: int) -> CartItem | None:
        """Set a line's quantity. Unknown lines (or vanished products) are a no-op."""
        index = self._find(item_id)
        if index is None:
            return None

        quantity = _parse_quantity(quantity)
        item = self._items[index]
        product = self.catalog.get_product_by_id(item.product_id)
        if product is None:
            return None

        if quantity > product.stock:
            raise CartError(
                f"Only {product.stock} items available in stock",
                details={"product_id": product.id, "requested_quantity": quantity, "stock": product.stock},
            )

        line = replace(item, quantity=quantity)
        self._items[index] = line
        return line

    def remove_item(self, item_id: str) -> None:
        self._items = [item for item in self._items if item.id != item_id]

    def clear_cart(self) -> None:
        self._items = []

    def calculate_total(self) -> Decimal:
        """Sum of price * quantity. No tax is applied."""
        return sum((item.line_total for item in self._items), ZERO)

    def checkout(
        self,
        payment_method,
        amount_received=None,
        cashier: Identity | None = None,
    ) -> Transaction:
        """
        Finalize the cart into a Transaction.

        Cash requires `amount_received` >= total and records the change.
        The cashier defaults to the bound session's signed-in user.
        """
        method = _parse_payment_method(payment_method)

        if not self._items:
            raise CartError("Cannot checkout with empty cart")

        total = self.calculate_total()

        received = None
        if method is PaymentMethod.CASH:
            if amount_received is None:
                raise CartError("Insufficient amount received", details={"total": str(total)})
            try:
                exact = parse_amount(amount_received)
            except ValueError:
                raise CartError("Amount received must be a number")
            # compare the unrounded amount against the total
            if exact < total:
                logger.warning("Rejected cash checkout: received %s of %s", exact, total)
                raise CartError(
                    "Insufficient amount received",
                    details={"total": str(total), "amount_received": str(exact)},
                )
            received = to_money(exact)

        if cashier is None and self.session is not None:
            cashier = self.session.current_user
        if cashier is None:
            raise CartError("No cashier signed in")

        for item in self._items:
            self.catalog.update_stock(item.product_id, -item.quantity)

        transaction = Transaction(
            id=str(uuid.uuid4()),
            items=tuple(self._items),
            total=total,
            payment_method=method,
            timestamp=self.clock(),
            cashier_id=cashier.id,
            cashier_name=cashier.name,
            amount_received=received,
            change=received - total if received is not None else None,
        )

        self._transactions.append(transaction)
        self.clear_cart()

        logger.info(
            "Sale completed: %s total=%s method=%s cashier=%s",
            transaction.id, total, method.value, cashier.id,
        )
        return transaction
