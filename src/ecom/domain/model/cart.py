"""Cart aggregate."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from ecom.domain.exceptions import ValidationError
from ecom.domain.model.aggregate import AggregateRoot


@dataclass
class CartItem:
    id: str
    product_id: str
    quantity: int
    variant_id: str | None = None


@dataclass
class Cart(AggregateRoot):
    """Shopping cart; may be anonymous until assigned to a user."""

    id: str
    user_id: str | None = None
    items: list[CartItem] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    version: int = 0

    @staticmethod
    def create(id: str, user_id: str | None = None) -> Cart:
        return Cart(id=id, user_id=user_id)

    # --- Mutations ------------------------------------------------------------

    def assign_to_user(self, user_id: str) -> None:
        if not user_id:
            raise ValidationError("User is required", code="Cart.UserRequired")
        self.user_id = user_id

    def add_item(
        self, product_id: str, quantity: int = 1, variant_id: str | None = None
    ) -> CartItem:
        """Add a line, or increase the quantity of a matching one."""
        _check_quantity(quantity)
        for item in self.items:
            if item.product_id == product_id and item.variant_id == variant_id:
                item.quantity += quantity
                return item
        item = CartItem(
            id=uuid.uuid4().hex,
            product_id=product_id,
            quantity=quantity,
            variant_id=variant_id,
        )
        self.items.append(item)
        return item

    def update_item_quantity(self, item_id: str, quantity: int) -> None:
        _check_quantity(quantity)
        self._find_item(item_id).quantity = quantity

    def remove_item(self, item_id: str) -> None:
        self.items.remove(self._find_item(item_id))

    def clear(self) -> None:
        self.items.clear()

    # --- Queries --------------------------------------------------------------

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # --- Internal helpers -----------------------------------------------------

    def _find_item(self, item_id: str) -> CartItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise ValidationError(f"Cart item '{item_id}' not found", code="Cart.ItemNotFound")


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError("Quantity must be positive", code="Cart.InvalidQuantity")
