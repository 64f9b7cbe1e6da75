"""Application service: Update Product Variant use case."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping

from ecom.application.dto import ProductVariantDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import variant_to_dto
from ecom.domain.exceptions import DuplicateSkuError, EntityNotFoundError
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.domain.service.variant_composition_service import VariantCompositionService

logger = logging.getLogger(__name__)


class UpdateProductVariantHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("ProductVariant.UpdateFailed")
    def handle(
        self,
        variant_id: str,
        sku: str | None = None,
        price: str | Decimal | None = None,
        attribute_values: Mapping[str, Any] | None = None,
        replace_attributes: bool = False,
    ) -> ProductVariantDTO:
        """Change SKU, price and/or attribute values; ``None`` keeps a field.

        Stock and status have their own handlers.
        """
        with self._uow:
            variant = self._uow.variants.get_by_id(variant_id)
            if variant is None:
                raise EntityNotFoundError("ProductVariant", variant_id)
            product = self._uow.products.get_by_id(variant.product_id)
            if product is None:
                raise EntityNotFoundError("Product", variant.product_id)

            new_sku = variant.sku if sku is None else (sku.strip() or None)
            if new_sku is not None and new_sku != variant.sku:
                if self._uow.variants.sku_exists(new_sku, exclude_id=variant.id):
                    raise DuplicateSkuError("ProductVariant", new_sku)
            new_price = variant.price
            if price is not None:
                new_price = Money.of(price, product.base_price.currency)

            if attribute_values is not None:
                composition = VariantCompositionService(
                    self._uow.attributes, self._uow.variants
                )
                composition.assign_attribute_values(
                    variant, attribute_values, replace=replace_attributes
                )
            variant.update(new_sku, new_price)

            self._uow.variants.update(variant)
            self._uow.commit()

        logger.info("Variant %s updated", variant.id)
        return variant_to_dto(variant, product.base_price)
