"""Application service: activate or deactivate a Product."""

from __future__ import annotations

import logging

from ecom.application.dto import ProductDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import product_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateProductStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Product.UpdateStatusFailed")
    def handle(self, product_id: str, is_active: bool) -> ProductDTO:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)

            product.set_active(is_active)
            self._uow.products.update(product)
            self._uow.commit()

        logger.info("Product %s is_active=%s", product.id, product.is_active)
        return product_to_dto(product)
