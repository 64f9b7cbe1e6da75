"""Application service: Show Cart use case."""

from __future__ import annotations

from ecom.application.dto import CartDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import cart_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Cart.GetFailed")
    def handle(self, cart_id: str) -> CartDTO:
        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError("Cart", cart_id)
            return cart_to_dto(cart)
