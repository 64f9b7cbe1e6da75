"""Application service: Create Attribute use case."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ecom.application.dto import AttributeDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import attribute_to_dto
from ecom.domain.exceptions import DuplicateNameError
from ecom.domain.model.attribute import Attribute, AttributeType
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreateAttributeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Attribute.CreateFailed")
    def handle(
        self,
        name: str,
        attribute_type: AttributeType | str,
        display_name: str | None = None,
        filterable: bool = False,
        searchable: bool = False,
        is_variant: bool = False,
        configuration: Mapping[str, Any] | None = None,
    ) -> AttributeDTO:
        with self._uow:
            attribute = Attribute.create(
                self._uow.attributes.next_id(), name, display_name, attribute_type
            )
            if self._uow.attributes.name_exists(attribute.name):
                raise DuplicateNameError("Attribute", attribute.name)

            attribute.set_filterable(filterable)
            attribute.set_searchable(searchable)
            attribute.set_is_variant(is_variant)
            attribute.replace_configuration(configuration)

            self._uow.attributes.add(attribute)
            self._uow.commit()

        logger.info("Attribute created with ID: %s", attribute.id)
        return attribute_to_dto(attribute)
