"""Unit tests for the Cart and Order aggregates."""

import pytest

from ecom.domain.exceptions import ValidationError
from ecom.domain.model.cart import Cart
from ecom.domain.model.order import Order, OrderLineItem, OrderStatus
from ecom.domain.model.value_objects import Money


def _order(*lines: tuple[int, str]) -> Order:
    """Create an order from (quantity, unit price) tuples."""
    items = [
        OrderLineItem(
            product_id=f"p{i}",
            product_name=f"Product {i}",
            quantity=qty,
            unit_price=Money.of(price),
        )
        for i, (qty, price) in enumerate(lines or ((1, "10.00"),))
    ]
    return Order.create_from_lines("o1", "alice", items)


# ── Cart ─────────────────────────────────────────────────────────────────────


class TestCart:

    def test_new_cart_is_empty(self):
        cart = Cart.create("cart1")
        assert cart.is_empty
        assert cart.user_id is None

    def test_add_same_line_merges_quantity(self):
        cart = Cart.create("cart1")
        cart.add_item("p1", 1, "v1")
        cart.add_item("p1", 2, "v1")
        assert len(cart.items) == 1
        assert cart.total_quantity == 3

    def test_different_variants_are_separate_lines(self):
        cart = Cart.create("cart1")
        cart.add_item("p1", 1, "v1")
        cart.add_item("p1", 1, "v2")
        cart.add_item("p1", 1)
        assert len(cart.items) == 3

    def test_non_positive_quantity_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Cart.create("cart1").add_item("p1", 0)
        assert exc_info.value.code == "Cart.InvalidQuantity"

    def test_update_and_remove_item(self):
        cart = Cart.create("cart1")
        item = cart.add_item("p1")
        cart.update_item_quantity(item.id, 5)
        assert cart.total_quantity == 5
        cart.remove_item(item.id)
        assert cart.is_empty

    def test_unknown_item_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Cart.create("cart1").remove_item("nope")
        assert exc_info.value.code == "Cart.ItemNotFound"

    def test_clear(self):
        cart = Cart.create("cart1")
        cart.add_item("p1")
        cart.clear()
        assert cart.is_empty

    def test_assign_to_user(self):
        cart = Cart.create("cart1")
        cart.assign_to_user("bob")
        assert cart.user_id == "bob"


# ── Order ────────────────────────────────────────────────────────────────────


class TestOrderCreation:

    def test_total(self):
        order = _order((3, "15.00"), (2, "2.50"))
        assert order.total == Money.of("50.00")
        assert order.status is OrderStatus.PENDING

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Order.create_from_lines("o1", None, [])
        assert exc_info.value.code == "Order.Empty"

    def test_mixed_currencies_rejected(self):
        lines = [
            OrderLineItem("p1", "A", 1, Money.of("1", "USD")),
            OrderLineItem("p2", "B", 1, Money.of("1", "EUR")),
        ]
        with pytest.raises(ValidationError) as exc_info:
            Order.create_from_lines("o1", None, lines)
        assert exc_info.value.code == "Money.CurrencyMismatch"

    def test_line_quantity_must_be_positive(self):
        with pytest.raises(ValidationError, match="Quantity must be positive"):
            OrderLineItem("p1", "A", 0, Money.of("1"))


class TestOrderTransitions:

    def test_happy_path(self):
        order = _order()
        order.mark_as_paid()
        order.mark_as_shipped(" TRK-1 ")
        order.mark_as_delivered()
        assert order.status is OrderStatus.DELIVERED
        assert order.tracking_number == "TRK-1"

    def test_reship_only_updates_tracking(self):
        order = _order()
        order.mark_as_paid()
        order.mark_as_shipped("A")
        order.mark_as_shipped("B")
        assert order.status is OrderStatus.SHIPPED
        assert order.tracking_number == "B"

    def test_cannot_ship_pending_order(self):
        with pytest.raises(ValidationError, match="expected PROCESSING") as exc_info:
            _order().mark_as_shipped()
        assert exc_info.value.code == "Order.InvalidStatus"

    def test_return_after_delivery(self):
        order = _order()
        order.mark_as_paid()
        order.mark_as_shipped()
        order.mark_as_delivered()
        order.mark_as_returned()
        assert order.status is OrderStatus.RETURNED

    def test_cancel_pending_and_processing(self):
        pending = _order()
        pending.cancel()
        assert pending.status is OrderStatus.CANCELLED

        processing = _order()
        processing.mark_as_paid()
        processing.cancel()
        assert processing.status is OrderStatus.CANCELLED

    def test_cannot_cancel_twice(self):
        order = _order()
        order.cancel()
        with pytest.raises(ValidationError, match="already cancelled"):
            order.cancel()

    def test_cannot_cancel_shipped(self):
        order = _order()
        order.mark_as_paid()
        order.mark_as_shipped()
        with pytest.raises(ValidationError, match="Cannot cancel order in SHIPPED"):
            order.cancel()
