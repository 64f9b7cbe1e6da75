"""Application service: move an Order through fulfilment."""

from __future__ import annotations

import logging

from ecom.application.dto import OrderDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import order_to_dto
from ecom.domain.exceptions import EntityNotFoundError, ValidationError
from ecom.domain.model.order import Order, OrderStatus
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    OrderStatus.PROCESSING: lambda order, _: order.mark_as_paid(),
    OrderStatus.SHIPPED: lambda order, tracking: order.mark_as_shipped(tracking),
    OrderStatus.DELIVERED: lambda order, _: order.mark_as_delivered(),
    OrderStatus.RETURNED: lambda order, _: order.mark_as_returned(),
}


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Order.UpdateStatusFailed")
    def handle(
        self, order_id: str, status: str, tracking_number: str | None = None
    ) -> OrderDTO:
        """Apply the transition into *status*.

        Cancellation restores stock and goes through ``CancelOrderHandler``.
        """
        target = self._parse_status(status)
        with self._uow:
            order: Order | None = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            _TRANSITIONS[target](order, tracking_number)
            self._uow.orders.update(order)
            self._uow.commit()

        logger.info("Order %s is now %s", order_id, order.status.value)
        return order_to_dto(order)

    @staticmethod
    def _parse_status(status: str) -> OrderStatus:
        try:
            target = OrderStatus(status.strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown order status '{status}'", code="Order.InvalidStatus"
            ) from None
        if target not in _TRANSITIONS:
            raise ValidationError(
                f"Cannot set order status to {target.value} directly",
                code="Order.InvalidStatus",
            )
        return target
