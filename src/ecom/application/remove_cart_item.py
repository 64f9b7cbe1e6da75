"""Application service: remove a line from a cart."""

from __future__ import annotations

import logging

from ecom.application.dto import CartDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import cart_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RemoveCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Cart.RemoveItemFailed")
    def handle(self, cart_id: str, item_id: str) -> CartDTO:
        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError("Cart", cart_id)

            cart.remove_item(item_id)
            self._uow.carts.update(cart)
            self._uow.commit()

        logger.info("Removed item %s from cart %s", item_id, cart_id)
        return cart_to_dto(cart)
