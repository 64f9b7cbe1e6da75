"""Application service: Delete Product use case."""

from __future__ import annotations

import logging

from ecom.application.handler_boundary import handler_boundary
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Product.DeleteFailed")
    def handle(self, product_id: str) -> None:
        """Delete a product together with all of its variants."""
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)

            variants = self._uow.variants.list_by_product(product.id)
            for variant in variants:
                self._uow.variants.delete(variant)
            self._uow.products.delete(product)
            self._uow.commit()

        logger.info(
            "Product deleted with ID: %s (%d variant(s) removed)", product_id, len(variants)
        )
