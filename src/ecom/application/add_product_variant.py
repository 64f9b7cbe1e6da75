"""Application service: Add Product Variant use case."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping

from ecom.application.dto import ProductVariantDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import variant_to_dto
from ecom.domain.exceptions import DuplicateSkuError, EntityNotFoundError
from ecom.domain.model.product_variant import ProductVariant
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.domain.service.variant_composition_service import VariantCompositionService

logger = logging.getLogger(__name__)


class AddProductVariantHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("ProductVariant.CreateFailed")
    def handle(
        self,
        product_id: str,
        sku: str | None = None,
        price: str | Decimal | None = None,
        stock_quantity: int = 0,
        attribute_values: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
        is_active: bool = True,
    ) -> ProductVariantDTO:
        """Create a variant of *product_id*.

        Steps:
        1. Resolve the product and reject a SKU held by another variant.
        2. Copy the product's current base price when no price is given.
        3. Assign the variant-attribute values (combination must be unique).
        4. Commit and return a DTO.
        """
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)

            sku = (sku or "").strip() or None
            if sku is not None and self._uow.variants.sku_exists(sku):
                raise DuplicateSkuError("ProductVariant", sku)

            if price is None:
                variant_price = product.base_price  # <-- price snapshot
            else:
                variant_price = Money.of(price, product.base_price.currency)

            factory = ProductVariant.create if is_active else ProductVariant.create_inactive
            variant = factory(
                self._uow.variants.next_id(), product.id, sku, variant_price, stock_quantity
            )

            composition = VariantCompositionService(self._uow.attributes, self._uow.variants)
            composition.assign_attribute_values(variant, attribute_values or {})

            for key, value in (metadata or {}).items():
                variant.update_metadata(key, value)

            self._uow.variants.add(variant)
            self._uow.commit()

        logger.info("Variant created with ID: %s for product %s", variant.id, product.id)
        return variant_to_dto(variant, product.base_price)
