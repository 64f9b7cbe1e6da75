"""Application service: Show Order use case."""

from __future__ import annotations

from ecom.application.dto import OrderDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import order_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Order.GetFailed")
    def handle(self, order_id: str) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)
            return order_to_dto(order)
