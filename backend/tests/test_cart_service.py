"""
Cart and checkout tests.

Verifies:
- Cart quantity never exceeds catalog stock
- Checkout validation (empty cart, cash received, payment method, cashier)
- Successful checkout snapshots the lines, decrements stock and clears the cart
"""

from datetime import datetime
from decimal import Decimal

import pytest

from boutique_pos.models import PaymentMethod
from boutique_pos.services.cart_service import Cart, CartError

from helpers import CASHIER


# =============================================================================
# ADDING AND CHANGING LINES
# =============================================================================


class TestAddItem:
    def test_add_item_snapshots_name_and_price(self, cart, product_a):
        line = cart.add_item(product_a.id, 2)
        assert line.product_id == product_a.id
        assert line.name == "Product A"
        assert line.price == Decimal("10.00")
        assert line.quantity == 2
        assert cart.items == (line,)

    def test_add_same_product_merges_lines(self, cart, product_a):
        first = cart.add_item(product_a.id)
        second = cart.add_item(product_a.id, 2)
        assert len(cart.items) == 1
        assert second.id == first.id
        assert cart.items[0].quantity == 3

    def test_add_unknown_product_fails(self, cart):
        with pytest.raises(CartError, match="Product not found"):
            cart.add_item("missing")
        assert cart.items == ()

    def test_add_more_than_stock_fails(self, cart, product_a):
        with pytest.raises(CartError, match="Only 5 items available"):
            cart.add_item(product_a.id, 6)
        assert cart.items == ()

    def test_second_add_counts_quantity_already_in_cart(self, cart, product_a):
        cart.add_item(product_a.id, 3)
        with pytest.raises(CartError) as excinfo:
            cart.add_item(product_a.id, 3)
        assert excinfo.value.details["requested_quantity"] == 6
        assert cart.items[0].quantity == 3

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_non_positive_or_fractional_quantity_fails(self, cart, product_a, quantity):
        with pytest.raises(CartError):
            cart.add_item(product_a.id, quantity)
        assert cart.items == ()

    def test_name_snapshot_survives_catalog_rename(self, cart, catalog, product_a):
        cart.add_item(product_a.id)
        catalog.update_product(product_a.id, {"name": "Renamed", "price": "99.00"})
        assert cart.items[0].name == "Product A"
        assert cart.items[0].price == Decimal("10.00")


class TestUpdateQuantity:
    def test_update_quantity(self, cart, product_a):
        line = cart.add_item(product_a.id)
        updated = cart.update_quantity(line.id, 5)
        assert updated.quantity == 5
        assert cart.items[0].quantity == 5

    def test_update_beyond_stock_rejected(self, cart, product_a):
        line = cart.add_item(product_a.id, 2)
        with pytest.raises(CartError):
            cart.update_quantity(line.id, 6)
        assert cart.items[0].quantity == 2

    def test_update_below_one_rejected(self, cart, product_a):
        line = cart.add_item(product_a.id, 2)
        with pytest.raises(CartError):
            cart.update_quantity(line.id, 0)
        assert cart.items[0].quantity == 2

    def test_update_unknown_line_is_noop(self, cart, product_a):
        cart.add_item(product_a.id)
        assert cart.update_quantity("missing", 2) is None
        assert cart.items[0].quantity == 1

    def test_update_after_product_deleted_is_noop(self, cart, catalog, product_a):
        line = cart.add_item(product_a.id)
        catalog.delete_product(product_a.id)
        assert cart.update_quantity(line.id, 2) is None
        assert cart.items[0].quantity == 1


class TestRemoveAndTotal:
    def test_remove_item_and_clear(self, cart, catalog, product_a):
        other = catalog.add_product({"name": "B", "price": "2.50", "stock": 10})
        line = cart.add_item(product_a.id)
        cart.add_item(other.id, 4)

        cart.remove_item(line.id)
        assert [i.product_id for i in cart.items] == [other.id]

        cart.remove_item("missing")
        cart.clear_cart()
        assert cart.items == ()

    def test_calculate_total_has_no_tax(self, cart, catalog, product_a):
        other = catalog.add_product({"name": "B", "price": "2.50", "stock": 10})
        cart.add_item(product_a.id, 2)
        cart.add_item(other.id, 3)
        assert cart.calculate_total() == Decimal("27.50")

    def test_empty_cart_total_is_zero(self, cart):
        assert cart.calculate_total() == Decimal("0")


# =============================================================================
# CHECKOUT
# =============================================================================


class TestCheckoutValidation:
    def test_empty_cart_fails_and_log_unchanged(self, cart, as_cashier):
        with pytest.raises(CartError, match="empty cart"):
            cart.checkout("card")
        assert cart.transactions == ()

    @pytest.mark.parametrize("received", [None, "29.99", 0, "29.995", Decimal("29.999")])
    def test_insufficient_cash_fails(self, cart, catalog, product_a, as_cashier, received):
        cart.add_item(product_a.id, 3)
        with pytest.raises(CartError, match="Insufficient amount received"):
            cart.checkout(PaymentMethod.CASH, received)
        assert cart.transactions == ()
        assert len(cart.items) == 1
        assert catalog.get_product_by_id(product_a.id).stock == 5

    def test_non_numeric_cash_fails(self, cart, product_a, as_cashier):
        cart.add_item(product_a.id)
        with pytest.raises(CartError):
            cart.checkout("cash", "ten dollars")

    def test_unknown_payment_method_fails(self, cart, product_a, as_cashier):
        cart.add_item(product_a.id)
        with pytest.raises(CartError, match="Unknown payment method"):
            cart.checkout("cheque")
        assert len(cart.items) == 1

    def test_checkout_without_cashier_fails(self, cart, catalog, product_a):
        cart.add_item(product_a.id)
        with pytest.raises(CartError, match="No cashier"):
            cart.checkout("card")
        assert catalog.get_product_by_id(product_a.id).stock == 5
        assert cart.transactions == ()


class TestCheckout:
    def test_scenario_exact_cash(self, cart, catalog, product_a, as_cashier):
        cart.add_item(product_a.id, 3)
        with pytest.raises(CartError):
            cart.add_item(product_a.id, 3)

        txn = cart.checkout("cash", Decimal("30.00"))

        assert txn.total == Decimal("30.00")
        assert txn.change == Decimal("0.00")
        assert txn.amount_received == Decimal("30.00")
        assert catalog.get_product_by_id(product_a.id).stock == 2
        assert cart.items == ()
        assert cart.transactions == (txn,)

    def test_cash_change(self, cart, product_a, as_cashier):
        cart.add_item(product_a.id, 2)
        txn = cart.checkout("cash", "50")
        assert txn.change == Decimal("30.00")

    def test_sub_cent_amount_covering_total_is_rounded(self, cart, product_a, as_cashier):
        cart.add_item(product_a.id, 3)
        txn = cart.checkout("cash", "30.004")
        assert txn.amount_received == Decimal("30.00")
        assert txn.change == Decimal("0.00")

    @pytest.mark.parametrize("method", ["card", "mobile", "petty-cash"])
    def test_non_cash_methods_need_no_amount(self, cart, product_a, as_cashier, method):
        cart.add_item(product_a.id)
        txn = cart.checkout(method)
        assert txn.payment_method == PaymentMethod(method)
        assert txn.amount_received is None
        assert txn.change is None

    def test_cashier_comes_from_session(self, cart, product_a, as_manager):
        cart.add_item(product_a.id)
        txn = cart.checkout("card")
        assert txn.cashier_id == "3"
        assert txn.cashier_name == "Manager User"

    def test_explicit_cashier_without_session(self, catalog, product_a):
        cart = Cart(catalog, clock=lambda: datetime(2024, 5, 4, 10, 30))
        cart.add_item(product_a.id)
        txn = cart.checkout("mobile", cashier=CASHIER)
        assert txn.cashier_id == "2"
        assert txn.timestamp == datetime(2024, 5, 4, 10, 30)

    def test_transaction_is_immutable_snapshot(self, cart, catalog, product_a, as_cashier):
        cart.add_item(product_a.id, 2)
        txn = cart.checkout("card")

        catalog.update_product(product_a.id, {"name": "Renamed"})
        cart.add_item(product_a.id, 1)

        assert txn.items[0].name == "Product A"
        assert txn.items[0].quantity == 2
        with pytest.raises(AttributeError):
            txn.total = Decimal("0")

    def test_transactions_append_in_order(self, cart, product_a, as_cashier):
        cart.add_item(product_a.id)
        first = cart.checkout("card")
        cart.add_item(product_a.id)
        second = cart.checkout("mobile")
        assert [t.id for t in cart.transactions] == [first.id, second.id]

    def test_transaction_to_dict(self, cart, product_a, as_cashier):
        cart.add_item(product_a.id, 2)
        data = cart.checkout("cash", "25").to_dict()

        assert data["total"] == "20.00"
        assert data["payment_method"] == "cash"
        assert data["amount_received"] == "25.00"
        assert data["change"] == "5.00"
        assert data["cashier_name"] == "Cashier User"
        assert data["timestamp"].endswith("Z")
        assert data["items"][0]["line_total"] == "20.00"
