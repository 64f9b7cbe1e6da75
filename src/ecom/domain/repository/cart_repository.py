"""Abstract repository for the Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique cart ID."""

    @abstractmethod
    def get_by_id(self, cart_id: str) -> Cart | None:
        """Return a cart by its ID, or None if not found."""

    @abstractmethod
    def get_by_user(self, user_id: str) -> Cart | None:
        """Return the cart assigned to *user_id*, or None."""

    @abstractmethod
    def add(self, cart: Cart) -> None:
        """Register a new cart with the unit of work."""

    @abstractmethod
    def update(self, cart: Cart) -> None:
        """Register a changed cart with the unit of work."""

    @abstractmethod
    def delete(self, cart: Cart) -> None:
        """Register a cart for deletion with the unit of work."""
