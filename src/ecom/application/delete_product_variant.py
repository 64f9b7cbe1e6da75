"""Application service: Delete Product Variant use case."""

from __future__ import annotations

import logging

from ecom.application.handler_boundary import handler_boundary
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteProductVariantHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("ProductVariant.DeleteFailed")
    def handle(self, variant_id: str) -> None:
        with self._uow:
            variant = self._uow.variants.get_by_id(variant_id)
            if variant is None:
                raise EntityNotFoundError("ProductVariant", variant_id)

            self._uow.variants.delete(variant)
            self._uow.commit()

        logger.info("Variant deleted with ID: %s", variant_id)
