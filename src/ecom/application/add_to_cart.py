"""Application service: Add Item to Cart use case."""

from __future__ import annotations

import logging

from ecom.application.dto import CartDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import cart_to_dto
from ecom.domain.exceptions import EntityNotFoundError, ValidationError
from ecom.domain.model.cart import Cart
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Cart.AddItemFailed")
    def handle(
        self,
        product_id: str,
        quantity: int = 1,
        variant_id: str | None = None,
        cart_id: str | None = None,
        user_id: str | None = None,
    ) -> CartDTO:
        """Add a product (or one of its variants) to a cart.

        Without ``cart_id`` the user's cart is used, and a new cart is
        created when there is none.
        """
        with self._uow:
            cart, is_new = self._resolve_cart(cart_id, user_id)

            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)
            if not product.is_active:
                raise ValidationError(
                    f"Product '{product.name}' is not available", code="Product.Inactive"
                )
            if variant_id is not None:
                variant = self._uow.variants.get_by_id(variant_id)
                if variant is None:
                    raise EntityNotFoundError("ProductVariant", variant_id)
                if variant.product_id != product.id:
                    raise ValidationError(
                        f"Variant '{variant_id}' does not belong to product '{product.name}'",
                        code="ProductVariant.ProductMismatch",
                    )

            cart.add_item(product.id, quantity, variant_id)
            if is_new:
                self._uow.carts.add(cart)
            else:
                self._uow.carts.update(cart)
            self._uow.commit()

        logger.info("Added %d x %s to cart %s", quantity, product_id, cart.id)
        return cart_to_dto(cart)

    def _resolve_cart(
        self, cart_id: str | None, user_id: str | None
    ) -> tuple[Cart, bool]:
        if cart_id is not None:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError("Cart", cart_id)
            return cart, False
        if user_id is not None:
            cart = self._uow.carts.get_by_user(user_id)
            if cart is not None:
                return cart, False
        return Cart.create(self._uow.carts.next_id(), user_id), True
