"""Unit tests for the VariantCompositionService domain service."""

import pytest

from ecom.domain.exceptions import (
    DuplicateCombinationError,
    EntityNotFoundError,
    InvalidAttributeValueError,
    NotVariantAttributeError,
)
from ecom.domain.model.product_variant import ProductVariant
from ecom.domain.service.variant_composition_service import VariantCompositionService
from tests.fakes import make_uow, seed_attribute, seed_product


def _setup():
    """A product with one committed variant (size M, color Red)."""
    uow = make_uow()
    size = seed_attribute(
        uow, "size", "Select", is_variant=True, configuration={"values": ["S", "M", "L"]}
    )
    color = seed_attribute(uow, "color", "Text", is_variant=True)
    material = seed_attribute(uow, "material", "Text")
    product_id = seed_product(uow)
    service = VariantCompositionService(uow.attributes, uow.variants)

    with uow:
        existing = ProductVariant.create("v1", product_id, "SHIRT-M-RED")
        service.assign_attribute_values(existing, {size: "M", color: "Red"})
        uow.variants.add(existing)
        uow.commit()

    ids = {"size": size, "color": color, "material": material, "product": product_id}
    return uow, service, ids


class TestAssignAttributeValues:

    def test_distinct_combination_accepted(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        service.assign_attribute_values(variant, {ids["size"]: "L", ids["color"]: "Red"})
        assert variant.values() == {ids["size"]: "L", ids["color"]: "Red"}

    def test_duplicate_combination_rejected(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        with pytest.raises(DuplicateCombinationError) as exc_info:
            service.assign_attribute_values(variant, {ids["color"]: "Red", ids["size"]: "M"})
        assert exc_info.value.code == "ProductVariant.DuplicateCombination"
        assert exc_info.value.conflicting_variant_id == "v1"
        assert variant.values() == {}

    def test_whitespace_does_not_make_values_distinct(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        with pytest.raises(DuplicateCombinationError):
            service.assign_attribute_values(variant, {ids["size"]: "M", ids["color"]: " Red "})

    def test_same_combination_on_another_product_is_fine(self):
        uow, service, ids = _setup()
        other_product = seed_product(uow, name="Hoodie")
        variant = ProductVariant.create("v2", other_product)
        service.assign_attribute_values(variant, {ids["size"]: "M", ids["color"]: "Red"})

    def test_merge_keeps_existing_values(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        service.assign_attribute_values(variant, {ids["size"]: "S"})
        service.assign_attribute_values(variant, {ids["color"]: "Blue"})
        assert variant.values() == {ids["size"]: "S", ids["color"]: "Blue"}

    def test_replace_drops_unlisted_values(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        service.assign_attribute_values(variant, {ids["size"]: "S", ids["color"]: "Blue"})
        service.assign_attribute_values(variant, {ids["size"]: "L"}, replace=True)
        assert variant.values() == {ids["size"]: "L"}

    def test_reassigning_own_combination_is_not_a_conflict(self):
        uow, service, ids = _setup()
        with uow:
            existing = uow.variants.get_by_id("v1")
            service.assign_attribute_values(existing, {ids["size"]: "M"})
        assert existing.values()[ids["size"]] == "M"

    def test_non_variant_attribute_rejected(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        with pytest.raises(NotVariantAttributeError):
            service.assign_attribute_values(variant, {ids["material"]: "Cotton"})

    def test_unknown_attribute_rejected(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        with pytest.raises(EntityNotFoundError) as exc_info:
            service.assign_attribute_values(variant, {"nope": "x"})
        assert exc_info.value.code == "Attribute.NotFound"

    def test_invalid_value_leaves_variant_unchanged(self):
        uow, service, ids = _setup()
        variant = ProductVariant.create("v2", ids["product"])
        service.assign_attribute_values(variant, {ids["color"]: "Blue"})
        with pytest.raises(InvalidAttributeValueError):
            service.assign_attribute_values(
                variant, {ids["color"]: "Green", ids["size"]: "XXL"}
            )
        assert variant.values() == {ids["color"]: "Blue"}


class TestEnsureUniqueCombination:

    def test_variants_without_values_never_collide(self):
        uow, service, ids = _setup()
        with uow:
            uow.variants.add(ProductVariant.create("v2", ids["product"], "PLAIN-1"))
            uow.commit()
        service.ensure_unique_combination(ProductVariant.create("v3", ids["product"]))


class TestEquivalentValuesCollide:

    def _product_with(self, attribute_type, configuration=None):
        uow = make_uow()
        attribute_id = seed_attribute(
            uow, "option", attribute_type, is_variant=True, configuration=configuration
        )
        product_id = seed_product(uow)
        return uow, VariantCompositionService(uow.attributes, uow.variants), attribute_id, product_id

    def _commit_variant(self, uow, service, variant_id, product_id, values):
        with uow:
            variant = ProductVariant.create(variant_id, product_id)
            service.assign_attribute_values(variant, values)
            uow.variants.add(variant)
            uow.commit()

    def test_color_name_and_hex(self):
        uow, service, color, product_id = self._product_with(
            "Color", {"values": [{"name": "Red", "hex": "#FF0000"}, {"name": "Blue", "hex": "#0000FF"}]}
        )
        self._commit_variant(uow, service, "v1", product_id, {color: "Red"})

        for spelling in ("#ff0000", "#FF0000"):
            with pytest.raises(DuplicateCombinationError):
                service.assign_attribute_values(
                    ProductVariant.create("v2", product_id), {color: spelling}
                )
        assert uow.variants.get_by_id("v1").values() == {color: "Red"}

    def test_number_and_numeric_text(self):
        uow, service, number, product_id = self._product_with("Number")
        self._commit_variant(uow, service, "v1", product_id, {number: 42})

        for spelling in ("42", 42.0, "42.00"):
            with pytest.raises(DuplicateCombinationError):
                service.assign_attribute_values(
                    ProductVariant.create("v2", product_id), {number: spelling}
                )

    def test_different_numbers_do_not_collide(self):
        uow, service, number, product_id = self._product_with("Number")
        self._commit_variant(uow, service, "v1", product_id, {number: 42})
        variant = ProductVariant.create("v2", product_id)
        service.assign_attribute_values(variant, {number: "42.5"})
        assert variant.values() == {number: "42.5"}
