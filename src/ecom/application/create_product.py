"""Application service: Create Product use case.

Coordinates the product with the categories and attributes it refers
to.  Unknown categories are skipped with a warning; unknown attributes
are an error.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping, Sequence

from ecom.application.dto import ProductDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import product_to_dto
from ecom.domain.exceptions import (
    DuplicateSkuError,
    DuplicateSlugError,
    EntityNotFoundError,
)
from ecom.domain.model.product import Product
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreateProductHandler:

    def __init__(self, uow: UnitOfWork, default_currency: str = "USD") -> None:
        self._uow = uow
        self._default_currency = default_currency

    @handler_boundary("Product.CreateFailed")
    def handle(
        self,
        name: str,
        base_price: str | Decimal,
        slug: str | None = None,
        description: str = "",
        sku: str | None = None,
        currency: str | None = None,
        category_ids: Sequence[str] = (),
        attribute_values: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
        is_active: bool = True,
    ) -> ProductDTO:
        with self._uow:
            price = Money.of(base_price, currency or self._default_currency)
            factory = Product.create if is_active else Product.create_inactive
            product = factory(
                self._uow.products.next_id(), name, slug, price, description, sku
            )

            if self._uow.products.slug_exists(product.slug.value):
                raise DuplicateSlugError("Product", product.slug.value)
            if product.sku is not None and self._uow.products.sku_exists(product.sku):
                raise DuplicateSkuError("Product", product.sku)

            for category_id in category_ids:
                if self._uow.categories.get_by_id(category_id) is None:
                    logger.warning(
                        "Category %s not found, skipping for product %s",
                        category_id,
                        product.name,
                    )
                    continue
                product.add_category(category_id)

            for attribute_id, value in (attribute_values or {}).items():
                attribute = self._uow.attributes.get_by_id(attribute_id)
                if attribute is None:
                    raise EntityNotFoundError("Attribute", attribute_id)
                product.add_attribute(attribute, value)

            for key, value in (metadata or {}).items():
                product.update_metadata(key, value)

            self._uow.products.add(product)
            self._uow.commit()

        logger.info("Product created with ID: %s", product.id)
        return product_to_dto(product)
