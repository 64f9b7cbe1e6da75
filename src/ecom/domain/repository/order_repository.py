"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return the orders placed by *user_id*, oldest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Register a new order with the unit of work."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Register a changed order with the unit of work."""
