"""Application service: show a Product with its variants."""

from __future__ import annotations

from ecom.application.dto import ProductDetailDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import product_to_dto, variant_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork


class GetProductDetailHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Product.GetFailed")
    def handle(self, product_id_or_slug: str) -> ProductDetailDTO:
        """Variants without their own price report the product's base price."""
        with self._uow:
            product = self._uow.products.get_by_id(product_id_or_slug)
            if product is None:
                product = self._uow.products.get_by_slug(product_id_or_slug)
            if product is None:
                raise EntityNotFoundError("Product", product_id_or_slug)

            category_names = []
            for category_id in product.category_ids:
                category = self._uow.categories.get_by_id(category_id)
                if category is not None:
                    category_names.append(category.name)

            variants = self._uow.variants.list_by_product(product.id)
            return ProductDetailDTO(
                product=product_to_dto(product),
                category_names=category_names,
                variants=[variant_to_dto(v, product.base_price) for v in variants],
            )
