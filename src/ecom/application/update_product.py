"""Application service: Update Product use case."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from ecom.application.dto import ProductDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import product_to_dto
from ecom.domain.exceptions import (
    DuplicateSkuError,
    DuplicateSlugError,
    EntityNotFoundError,
)
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Product.UpdateFailed")
    def handle(
        self,
        product_id: str,
        name: str,
        slug: str,
        base_price: str | Decimal,
        description: str | None = None,
        sku: str | None = None,
        category_ids: Sequence[str] | None = None,
        is_active: bool | None = None,
    ) -> ProductDTO:
        """Replace the product's core fields.

        Slug and SKU uniqueness are only checked when the value changes,
        so saving a product with its own slug/SKU never conflicts.
        ``category_ids`` (when given) replaces the category set.
        """
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)

            new_slug = (slug or "").strip()
            if new_slug and new_slug != product.slug.value:
                if self._uow.products.slug_exists(new_slug, exclude_id=product.id):
                    raise DuplicateSlugError("Product", new_slug)
            new_sku = (sku or "").strip() or None
            if new_sku is not None and new_sku != product.sku:
                if self._uow.products.sku_exists(new_sku, exclude_id=product.id):
                    raise DuplicateSkuError("Product", new_sku)

            price = Money.of(base_price, product.base_price.currency)
            product.update(name, new_slug, price, description, new_sku)

            if category_ids is not None:
                self._replace_categories(product, category_ids)
            if is_active is not None:
                product.set_active(is_active)

            self._uow.products.update(product)
            self._uow.commit()

        logger.info("Product %s updated", product.id)
        return product_to_dto(product)

    def _replace_categories(self, product, category_ids: Sequence[str]) -> None:
        for category_id in list(product.category_ids):
            if category_id not in category_ids:
                product.remove_category(category_id)
        for category_id in category_ids:
            if self._uow.categories.get_by_id(category_id) is None:
                logger.warning(
                    "Category %s not found, skipping for product %s",
                    category_id,
                    product.name,
                )
                continue
            product.add_category(category_id)
