"""Application service: Delete Attribute use case."""

from __future__ import annotations

import logging

from ecom.application.handler_boundary import handler_boundary
from ecom.domain.exceptions import AttributeInUseError, EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteAttributeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Attribute.DeleteFailed")
    def handle(self, attribute_id: str) -> None:
        """Delete an attribute that no product or variant uses."""
        with self._uow:
            attribute = self._uow.attributes.get_by_id(attribute_id)
            if attribute is None:
                raise EntityNotFoundError("Attribute", attribute_id)

            if self._uow.products.is_attribute_in_use(
                attribute.id
            ) or self._uow.variants.is_attribute_in_use(attribute.id):
                raise AttributeInUseError(attribute.name)

            self._uow.attributes.delete(attribute)
            self._uow.commit()

        logger.info("Attribute deleted with ID: %s", attribute_id)
