"""Application service: set, add or remove Product Variant stock."""

from __future__ import annotations

import logging

from ecom.application.dto import ProductVariantDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import variant_to_dto
from ecom.domain.exceptions import EntityNotFoundError, ValidationError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

STOCK_MODES = ("set", "add", "remove")


class UpdateVariantStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("ProductVariant.UpdateStockFailed")
    def handle(self, variant_id: str, quantity: int, mode: str = "set") -> ProductVariantDTO:
        if mode not in STOCK_MODES:
            raise ValidationError(
                f"Stock mode must be one of: {', '.join(STOCK_MODES)}",
                code="ProductVariant.InvalidStockMode",
            )
        with self._uow:
            variant = self._uow.variants.get_by_id(variant_id)
            if variant is None:
                raise EntityNotFoundError("ProductVariant", variant_id)
            product = self._uow.products.get_by_id(variant.product_id)
            if product is None:
                raise EntityNotFoundError("Product", variant.product_id)

            if mode == "set":
                variant.set_stock_quantity(quantity)
            elif mode == "add":
                variant.add_stock(quantity)
            else:
                variant.remove_stock(quantity)

            self._uow.variants.update(variant)
            self._uow.commit()

        logger.info("Variant %s stock is now %d", variant.id, variant.stock_quantity)
        return variant_to_dto(variant, product.base_price)
