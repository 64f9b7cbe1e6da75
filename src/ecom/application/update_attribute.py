"""Application service: Update Attribute use case."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ecom.application.dto import AttributeDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import attribute_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateAttributeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Attribute.UpdateFailed")
    def handle(
        self,
        attribute_id: str,
        display_name: str | None = None,
        filterable: bool | None = None,
        searchable: bool | None = None,
        is_variant: bool | None = None,
        configuration: Mapping[str, Any] | None = None,
        configuration_updates: Mapping[str, Any] | None = None,
    ) -> AttributeDTO:
        """Update the given fields; ``None`` leaves a field unchanged.

        ``configuration`` replaces the whole configuration, while
        ``configuration_updates`` sets (or, with a None value, removes)
        individual keys on top of it.
        """
        with self._uow:
            attribute = self._uow.attributes.get_by_id(attribute_id)
            if attribute is None:
                raise EntityNotFoundError("Attribute", attribute_id)

            if display_name is not None:
                attribute.update(display_name)
            if filterable is not None:
                attribute.set_filterable(filterable)
            if searchable is not None:
                attribute.set_searchable(searchable)
            if is_variant is not None:
                attribute.set_is_variant(is_variant)
            attribute.replace_configuration(configuration)
            for key, value in (configuration_updates or {}).items():
                attribute.update_configuration(key, value)

            self._uow.attributes.update(attribute)
            self._uow.commit()

        logger.info("Attribute %s updated", attribute.id)
        return attribute_to_dto(attribute)
