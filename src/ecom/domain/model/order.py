"""Order aggregate.

An order is created from a cart and owns its line items.  Each line keeps
the product name, SKU and unit price as they were when the order was
placed, so later catalog edits never change an existing order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ecom.domain.exceptions import ValidationError
from ecom.domain.model.aggregate import AggregateRoot
from ecom.domain.model.value_objects import Money


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


@dataclass
class OrderLineItem:
    """Price snapshot of one product/variant at order-creation time."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: Money  # locked at order-creation time
    variant_id: str | None = None
    sku: str | None = None

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError("Quantity must be positive", code="Order.InvalidQuantity")

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class Order(AggregateRoot):
    """Aggregate root for purchase orders.

    Use ``Order.create_from_lines()`` for new orders; the plain
    constructor is what the repository uses to reconstitute stored ones.
    """

    id: str
    user_id: str | None
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PENDING
    tracking_number: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create_from_lines(
        id: str, user_id: str | None, lines: list[OrderLineItem]
    ) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one item", code="Order.Empty")
        currencies = {line.unit_price.currency for line in lines}
        if len(currencies) > 1:
            raise ValidationError(
                f"Order lines must share one currency, got {', '.join(sorted(currencies))}",
                code="Money.CurrencyMismatch",
            )
        return Order(id=id, user_id=user_id, items=list(lines))

    # --- State transitions ----------------------------------------------------

    def mark_as_paid(self) -> None:
        """PENDING -> PROCESSING."""
        self._require(OrderStatus.PENDING, action="mark as paid")
        self.status = OrderStatus.PROCESSING

    def mark_as_shipped(self, tracking_number: str | None = None) -> None:
        """PROCESSING -> SHIPPED; a repeat call only updates tracking."""
        if self.status in (OrderStatus.CANCELLED, OrderStatus.DELIVERED):
            raise ValidationError(
                f"Cannot ship order in {self.status.value} status",
                code="Order.InvalidStatus",
            )
        if self.status != OrderStatus.SHIPPED:
            self._require(OrderStatus.PROCESSING, action="ship")
        if tracking_number:
            self.tracking_number = tracking_number.strip()
        self.status = OrderStatus.SHIPPED

    def mark_as_delivered(self) -> None:
        self._require(OrderStatus.SHIPPED, action="mark as delivered")
        self.status = OrderStatus.DELIVERED

    def mark_as_returned(self) -> None:
        self._require(OrderStatus.DELIVERED, action="mark as returned")
        self.status = OrderStatus.RETURNED

    def cancel(self) -> None:
        """PENDING|PROCESSING -> CANCELLED."""
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError("Order is already cancelled", code="Order.InvalidStatus")
        if self.status not in (OrderStatus.PENDING, OrderStatus.PROCESSING):
            raise ValidationError(
                f"Cannot cancel order in {self.status.value} status",
                code="Order.InvalidStatus",
            )
        self.status = OrderStatus.CANCELLED

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    # --- Internal helpers -----------------------------------------------------

    def _require(self, expected: OrderStatus, action: str) -> None:
        if self.status != expected:
            raise ValidationError(
                f"Cannot {action} order in {self.status.value} status, "
                f"expected {expected.value}",
                code="Order.InvalidStatus",
            )
