"""Application service: Create Order from Cart use case.

Turns a cart into an order in one unit of work: prices are copied into
the order lines, variant stock is removed and the cart is emptied.

Stock is handled in two phases (validate-then-mutate) so that a cart
with one unavailable line leaves every variant untouched.
"""

from __future__ import annotations

import logging

from ecom.application.dto import OrderDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import order_to_dto
from ecom.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from ecom.domain.model.order import Order, OrderLineItem
from ecom.domain.model.product_variant import ProductVariant
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreateOrderFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Order.CreateFailed")
    def handle(self, cart_id: str, user_id: str | None = None) -> OrderDTO:
        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError("Cart", cart_id)
            if cart.is_empty:
                raise ValidationError("Cart is empty", code="Cart.Empty")

            # Phase 1: resolve every line and check availability
            lines: list[OrderLineItem] = []
            reservations: list[tuple[ProductVariant, int]] = []
            for item in cart.items:
                product = self._uow.products.get_by_id(item.product_id)
                if product is None:
                    raise EntityNotFoundError("Product", item.product_id)
                if not product.is_active:
                    raise ValidationError(
                        f"Product '{product.name}' is not available",
                        code="Product.Inactive",
                    )

                unit_price, sku = product.base_price, product.sku
                if item.variant_id is not None:
                    variant = self._uow.variants.get_by_id(item.variant_id)
                    if variant is None:
                        raise EntityNotFoundError("ProductVariant", item.variant_id)
                    if not variant.is_active:
                        raise ValidationError(
                            f"Variant '{variant.sku or variant.id}' is not available",
                            code="ProductVariant.Inactive",
                        )
                    if item.quantity > variant.stock_quantity:
                        raise InsufficientStockError(item.quantity, variant.stock_quantity)
                    unit_price = variant.effective_price(product.base_price)
                    sku = variant.sku or product.sku
                    reservations.append((variant, item.quantity))

                lines.append(
                    OrderLineItem(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=item.quantity,
                        unit_price=unit_price,  # <-- price snapshot
                        variant_id=item.variant_id,
                        sku=sku,
                    )
                )

            order = Order.create_from_lines(
                self._uow.orders.next_id(), user_id or cart.user_id, lines
            )

            # Phase 2: mutate
            for variant, quantity in reservations:
                variant.remove_stock(quantity)
                self._uow.variants.update(variant)
            cart.clear()
            self._uow.carts.update(cart)
            self._uow.orders.add(order)
            self._uow.commit()

        logger.info("Order created with ID: %s from cart %s", order.id, cart_id)
        return order_to_dto(order)
