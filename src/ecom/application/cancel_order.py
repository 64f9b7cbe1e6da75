"""Application service: Cancel Order use case."""

from __future__ import annotations

import logging

from ecom.application.dto import OrderDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import order_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Order.CancelFailed")
    def handle(self, order_id: str) -> OrderDTO:
        """Cancel a PENDING or PROCESSING order and put its stock back.

        Variants deleted since the order was placed are skipped.
        """
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            order.cancel()

            for line in order.items:
                if line.variant_id is None:
                    continue
                variant = self._uow.variants.get_by_id(line.variant_id)
                if variant is None:
                    logger.warning(
                        "Variant %s no longer exists, stock not restored", line.variant_id
                    )
                    continue
                variant.add_stock(line.quantity)
                self._uow.variants.update(variant)

            self._uow.orders.update(order)
            self._uow.commit()

        logger.info("Order %s cancelled", order_id)
        return order_to_dto(order)
