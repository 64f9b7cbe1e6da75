"""Unit of work port.

A unit of work groups the repository registrations of one use case and
writes them in a single ``commit()``.  Commit is where the optimistic
version check happens: a pending change whose captured ``version`` no
longer matches storage raises ``ConcurrencyConflictError`` and nothing is
written.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.repository.attribute_repository import AttributeRepository
from ecom.domain.repository.audit_log_repository import AuditLogRepository
from ecom.domain.repository.cart_repository import CartRepository
from ecom.domain.repository.category_repository import CategoryRepository
from ecom.domain.repository.order_repository import OrderRepository
from ecom.domain.repository.product_repository import ProductRepository
from ecom.domain.repository.product_variant_repository import (
    ProductVariantRepository,
)


class UnitOfWork(ABC):

    categories: CategoryRepository
    attributes: AttributeRepository
    products: ProductRepository
    variants: ProductVariantRepository
    carts: CartRepository
    orders: OrderRepository
    audit_logs: AuditLogRepository

    @abstractmethod
    def commit(self) -> None:
        """Version-check and write every registered change."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every registered change."""

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.rollback()
