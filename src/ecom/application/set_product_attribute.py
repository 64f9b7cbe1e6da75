"""Application service: assign, change or remove one product attribute value."""

from __future__ import annotations

import logging
from typing import Any

from ecom.application.dto import ProductDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import product_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SetProductAttributeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Product.SetAttributeFailed")
    def handle(self, product_id: str, attribute_id: str, value: Any) -> ProductDTO:
        """Set the value of *attribute_id*; a None value removes it."""
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)

            if value is None:
                product.remove_attribute(attribute_id)
            else:
                attribute = self._uow.attributes.get_by_id(attribute_id)
                if attribute is None:
                    raise EntityNotFoundError("Attribute", attribute_id)
                if attribute.id in product.attributes:
                    product.update_attribute_value(attribute, value)
                else:
                    product.add_attribute(attribute, value)

            self._uow.products.update(product)
            self._uow.commit()

        logger.info("Product %s attribute %s set", product.id, attribute_id)
        return product_to_dto(product)
