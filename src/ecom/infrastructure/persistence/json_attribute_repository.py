"""JSON-document implementation of AttributeRepository."""

from __future__ import annotations

from ecom.domain.model.attribute import Attribute, AttributeType, configuration_for
from ecom.domain.repository.attribute_repository import AttributeRepository
from ecom.infrastructure.persistence.json_repository import JsonRepository


class JsonAttributeRepository(JsonRepository[Attribute], AttributeRepository):

    collection = "attributes"

    # --- AttributeRepository interface ----------------------------------------

    def get_by_name(self, name: str) -> Attribute | None:
        for attribute in self._all():
            if attribute.name.lower() == name.lower():
                return attribute
        return None

    def list_all(self) -> list[Attribute]:
        return sorted(self._all(), key=lambda a: a.name.lower())

    def list_variant_attributes(self) -> list[Attribute]:
        return [a for a in self.list_all() if a.is_variant]

    def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        return any(
            a.name.lower() == name.lower() and a.id != exclude_id
            for a in self._all()
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(attribute: Attribute) -> dict:
        return {
            "id": attribute.id,
            "name": attribute.name,
            "display_name": attribute.display_name,
            "type": attribute.type.value,
            "configuration": attribute.configuration_map,
            "filterable": attribute.filterable,
            "searchable": attribute.searchable,
            "is_variant": attribute.is_variant,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Attribute:
        attribute_type = AttributeType(raw["type"])
        return Attribute(
            id=raw["id"],
            name=raw["name"],
            display_name=raw.get("display_name", raw["name"]),
            type=attribute_type,
            filterable=raw.get("filterable", False),
            searchable=raw.get("searchable", False),
            is_variant=raw.get("is_variant", False),
            configuration=configuration_for(attribute_type, raw.get("configuration")),
        )
