"""Integration tests for the product variant use cases."""

import pytest

from ecom.application.add_product_variant import AddProductVariantHandler
from ecom.application.delete_product_variant import DeleteProductVariantHandler
from ecom.application.update_product import UpdateProductHandler
from ecom.application.update_product_variant import UpdateProductVariantHandler
from ecom.application.update_variant_status import UpdateVariantStatusHandler
from ecom.application.update_variant_stock import UpdateVariantStockHandler
from ecom.domain.exceptions import (
    DuplicateCombinationError,
    DuplicateSkuError,
    EntityNotFoundError,
    InsufficientStockError,
    NegativeStockError,
    NotVariantAttributeError,
    ValidationError,
)
from ecom.infrastructure.persistence.document_store import JsonFileStore
from tests.fakes import make_uow, seed_attribute, seed_product


def _setup():
    """A 'Shirt' product with variant attributes size and color."""
    uow = make_uow()
    size = seed_attribute(
        uow, "size", "Select", is_variant=True, configuration={"values": ["S", "M", "L"]}
    )
    color = seed_attribute(
        uow,
        "color",
        "Color",
        is_variant=True,
        configuration={"values": [{"name": "Red", "hex": "#FF0000"}, {"name": "Blue", "hex": "#0000FF"}]},
    )
    product_id = seed_product(uow, "Shirt", "15.00")
    return uow, product_id, size, color


class TestAddProductVariant:

    def test_price_snapshot_from_base_price(self):
        uow, product_id, size, color = _setup()
        dto = AddProductVariantHandler(uow).handle(
            product_id, sku="SHIRT-M-RED", attribute_values={size: "M", color: "Red"}
        )
        assert dto.price == "15.00 USD"
        assert dto.has_price_override is True

        # a later base price change does not touch the snapshot
        UpdateProductHandler(uow).handle(product_id, "Shirt", "shirt", "18.00")
        assert uow.variants.get_by_id(dto.id).price.amount == 15

    def test_duplicate_combination_rejected(self):
        uow, product_id, size, color = _setup()
        handler = AddProductVariantHandler(uow)
        first = handler.handle(product_id, attribute_values={size: "M", color: "Red"})

        with pytest.raises(DuplicateCombinationError) as exc_info:
            handler.handle(product_id, attribute_values={color: "Red", size: "M"})

        assert exc_info.value.code == "ProductVariant.DuplicateCombination"
        assert exc_info.value.conflicting_variant_id == first.id
        assert len(uow.variants.list_by_product(product_id)) == 1

    def test_color_hex_collides_with_its_name(self):
        uow, product_id, size, color = _setup()
        handler = AddProductVariantHandler(uow)
        handler.handle(product_id, attribute_values={size: "M", color: "Red"})

        with pytest.raises(DuplicateCombinationError):
            handler.handle(product_id, attribute_values={size: "M", color: "#ff0000"})

    def test_shirt_scenario_through_json_files(self, tmp_path):
        uow = make_uow(JsonFileStore(tmp_path))
        color = seed_attribute(
            uow, "Color", "Select", is_variant=True, configuration={"values": ["Red", "Blue"]}
        )
        product_id = seed_product(uow, "Shirt", "15.00")
        handler = AddProductVariantHandler(make_uow(JsonFileStore(tmp_path)))
        handler.handle(product_id, sku="SHIRT-RED", attribute_values={color: "Red"})

        with pytest.raises(DuplicateCombinationError):
            handler.handle(product_id, sku="SHIRT-RED-2", attribute_values={color: "Red"})

        stored = make_uow(JsonFileStore(tmp_path)).variants.list_by_product(product_id)
        assert [v.sku for v in stored] == ["SHIRT-RED"]

    def test_distinct_combination_accepted(self):
        uow, product_id, size, color = _setup()
        handler = AddProductVariantHandler(uow)
        handler.handle(product_id, attribute_values={size: "M", color: "Red"})
        handler.handle(product_id, attribute_values={size: "M", color: "Blue"})
        assert len(uow.variants.list_by_product(product_id)) == 2

    def test_variants_without_attributes_do_not_collide(self):
        uow, product_id, _, _ = _setup()
        handler = AddProductVariantHandler(uow)
        handler.handle(product_id, sku="A")
        handler.handle(product_id, sku="B")
        assert len(uow.variants.list_by_product(product_id)) == 2

    def test_duplicate_sku_rejected(self):
        uow, product_id, _, _ = _setup()
        AddProductVariantHandler(uow).handle(product_id, sku="A")
        with pytest.raises(DuplicateSkuError) as exc_info:
            AddProductVariantHandler(uow).handle(product_id, sku="A")
        assert exc_info.value.code == "ProductVariant.DuplicateSku"

    def test_non_variant_attribute_rejected(self):
        uow, product_id, _, _ = _setup()
        material = seed_attribute(uow, "material", "Text")
        with pytest.raises(NotVariantAttributeError):
            AddProductVariantHandler(uow).handle(product_id, attribute_values={material: "Cotton"})

    def test_negative_stock_rejected(self):
        uow, product_id, _, _ = _setup()
        with pytest.raises(NegativeStockError):
            AddProductVariantHandler(uow).handle(product_id, stock_quantity=-1)

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            AddProductVariantHandler(make_uow()).handle("missing")


class TestUpdateProductVariant:

    def test_change_combination_to_a_taken_one_rejected(self):
        uow, product_id, size, color = _setup()
        handler = AddProductVariantHandler(uow)
        handler.handle(product_id, attribute_values={size: "M", color: "Red"})
        second = handler.handle(product_id, attribute_values={size: "L", color: "Red"})

        with pytest.raises(DuplicateCombinationError):
            UpdateProductVariantHandler(uow).handle(second.id, attribute_values={size: "M"})
        assert uow.variants.get_by_id(second.id).values()[size] == "L"

    def test_update_price_and_sku(self):
        uow, product_id, _, _ = _setup()
        created = AddProductVariantHandler(uow).handle(product_id, sku="A")
        dto = UpdateProductVariantHandler(uow).handle(created.id, sku="B", price="19.99")
        assert dto.sku == "B"
        assert dto.price == "19.99 USD"
        assert dto.version == 2

    def test_replace_attribute_values(self):
        uow, product_id, size, color = _setup()
        created = AddProductVariantHandler(uow).handle(
            product_id, attribute_values={size: "M", color: "Red"}
        )
        dto = UpdateProductVariantHandler(uow).handle(
            created.id, attribute_values={size: "S"}, replace_attributes=True
        )
        assert dto.attribute_values == {size: "S"}


class TestStockAndStatus:

    def test_stock_modes(self):
        uow, product_id, _, _ = _setup()
        created = AddProductVariantHandler(uow).handle(product_id, stock_quantity=5)
        handler = UpdateVariantStockHandler(uow)
        assert handler.handle(created.id, 10).stock_quantity == 10
        assert handler.handle(created.id, 3, "add").stock_quantity == 13
        assert handler.handle(created.id, 13, "remove").stock_quantity == 0

    def test_remove_more_than_available_rejected(self):
        uow, product_id, _, _ = _setup()
        created = AddProductVariantHandler(uow).handle(product_id, stock_quantity=1)
        with pytest.raises(InsufficientStockError):
            UpdateVariantStockHandler(uow).handle(created.id, 2, "remove")
        assert uow.variants.get_by_id(created.id).stock_quantity == 1

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UpdateVariantStockHandler(make_uow()).handle("v", 1, "double")
        assert exc_info.value.code == "ProductVariant.InvalidStockMode"

    def test_status(self):
        uow, product_id, _, _ = _setup()
        created = AddProductVariantHandler(uow).handle(product_id)
        assert UpdateVariantStatusHandler(uow).handle(created.id, False).is_active is False

    def test_delete(self):
        uow, product_id, _, _ = _setup()
        created = AddProductVariantHandler(uow).handle(product_id)
        DeleteProductVariantHandler(uow).handle(created.id)
        assert uow.variants.get_by_id(created.id) is None
