"""Application service: empty a cart."""

from __future__ import annotations

import logging

from ecom.application.dto import CartDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import cart_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Cart.ClearFailed")
    def handle(self, cart_id: str) -> CartDTO:
        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError("Cart", cart_id)

            cart.clear()
            self._uow.carts.update(cart)
            self._uow.commit()

        logger.info("Cart %s cleared", cart_id)
        return cart_to_dto(cart)
