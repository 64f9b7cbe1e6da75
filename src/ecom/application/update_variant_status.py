"""Application service: activate or deactivate a Product Variant."""

from __future__ import annotations

import logging

from ecom.application.dto import ProductVariantDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import variant_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateVariantStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("ProductVariant.UpdateStatusFailed")
    def handle(self, variant_id: str, is_active: bool) -> ProductVariantDTO:
        with self._uow:
            variant = self._uow.variants.get_by_id(variant_id)
            if variant is None:
                raise EntityNotFoundError("ProductVariant", variant_id)
            product = self._uow.products.get_by_id(variant.product_id)
            if product is None:
                raise EntityNotFoundError("Product", variant.product_id)

            variant.set_active(is_active)
            self._uow.variants.update(variant)
            self._uow.commit()

        logger.info("Variant %s is_active=%s", variant.id, variant.is_active)
        return variant_to_dto(variant, product.base_price)
