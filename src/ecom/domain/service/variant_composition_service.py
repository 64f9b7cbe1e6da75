"""Domain service: Variant Composition.

Enforces that the variants of one product each carry a distinct
combination of variant-attribute values.  The check spans sibling
aggregates, so it lives here rather than in ``ProductVariant``.

Uses the same two-phase approach as the other services:
  Phase 1 resolves, validates and compares the *prospective* combination;
  Phase 2 mutates.  A rejected assignment leaves the variant unchanged.
"""

from __future__ import annotations

from typing import Any, Mapping

from ecom.domain.exceptions import (
    DuplicateCombinationError,
    EntityNotFoundError,
    NotVariantAttributeError,
)
from ecom.domain.model.attribute import Attribute
from ecom.domain.model.product_variant import (
    CombinationKey,
    ProductVariant,
    combination_key_of,
)
from ecom.domain.repository.attribute_repository import AttributeRepository
from ecom.domain.repository.product_variant_repository import (
    ProductVariantRepository,
)


class VariantCompositionService:

    def __init__(
        self,
        attribute_repo: AttributeRepository,
        variant_repo: ProductVariantRepository,
    ) -> None:
        self._attribute_repo = attribute_repo
        self._variant_repo = variant_repo

    def assign_attribute_values(
        self,
        variant: ProductVariant,
        values: Mapping[str, Any],
        replace: bool = False,
    ) -> None:
        """Assign ``{attribute_id: value}`` to *variant*.

        With ``replace`` the given values become the variant's whole
        combination; otherwise they are merged into the current one.
        """
        # Phase 1: resolve and validate
        resolved: list[tuple[Attribute, Any]] = []
        for attribute_id, value in values.items():
            attribute = self._attribute_repo.get_by_id(attribute_id)
            if attribute is None:
                raise EntityNotFoundError("Attribute", attribute_id)
            if not attribute.is_variant:
                raise NotVariantAttributeError(attribute.name)
            resolved.append((attribute, attribute.validate_value(value)))

        prospective = {} if replace else variant.values()
        prospective.update({attribute.id: value for attribute, value in resolved})
        self._ensure_unique(variant, combination_key_of(prospective))

        # Phase 2: mutate
        if replace:
            variant.attribute_values.clear()
        for attribute, value in resolved:
            variant.set_attribute_value(attribute, value)

    def ensure_unique_combination(self, variant: ProductVariant) -> None:
        """Raise if a sibling already has *variant*'s current combination."""
        self._ensure_unique(variant, variant.combination_key)

    # --- Internal helpers -----------------------------------------------------

    def _ensure_unique(self, variant: ProductVariant, key: CombinationKey) -> None:
        # Variants without variant attributes are told apart by SKU only.
        if not key:
            return
        for sibling in self._variant_repo.list_by_product(variant.product_id):
            if sibling.id != variant.id and sibling.combination_key == key:
                raise DuplicateCombinationError(sibling.id)
