"""Integration tests for the product use cases."""

import pytest

from ecom.application.clear_product_attributes import ClearProductAttributesHandler
from ecom.application.create_product import CreateProductHandler
from ecom.application.delete_product import DeleteProductHandler
from ecom.application.get_product_detail import GetProductDetailHandler
from ecom.application.set_product_attribute import SetProductAttributeHandler
from ecom.application.update_product import UpdateProductHandler
from ecom.application.update_product_status import UpdateProductStatusHandler
from ecom.domain.exceptions import (
    DuplicateSkuError,
    DuplicateSlugError,
    EntityNotFoundError,
    InvalidAttributeValueError,
)
from tests.fakes import make_uow, seed_attribute, seed_category, seed_variant


class TestCreateProduct:

    def test_creates_product(self):
        uow = make_uow()
        dto = CreateProductHandler(uow).handle("Shirt", "15.00", sku="SHIRT")
        assert dto.slug == "shirt"
        assert dto.base_price == "15.00 USD"
        assert dto.sku == "SHIRT"
        assert dto.version == 1

    def test_default_currency_from_handler(self):
        dto = CreateProductHandler(make_uow(), default_currency="EUR").handle("Shirt", "1")
        assert dto.base_price == "1.00 EUR"

    def test_explicit_currency_wins(self):
        dto = CreateProductHandler(make_uow(), default_currency="EUR").handle(
            "Shirt", "1", currency="GBP"
        )
        assert dto.base_price == "1.00 GBP"

    def test_duplicate_slug_rejected(self):
        uow = make_uow()
        CreateProductHandler(uow).handle("Shirt", "1")
        with pytest.raises(DuplicateSlugError) as exc_info:
            CreateProductHandler(uow).handle("Shirt", "2")
        assert exc_info.value.code == "Product.DuplicateSlug"

    def test_duplicate_sku_rejected(self):
        uow = make_uow()
        CreateProductHandler(uow).handle("Shirt", "1", sku="X1")
        with pytest.raises(DuplicateSkuError):
            CreateProductHandler(uow).handle("Hoodie", "2", sku="X1")

    def test_missing_categories_are_skipped(self):
        uow = make_uow()
        category_id = seed_category(uow, "Clothing")
        dto = CreateProductHandler(uow).handle(
            "Shirt", "1", category_ids=[category_id, "missing"]
        )
        assert dto.category_ids == [category_id]

    def test_attribute_values_validated(self):
        uow = make_uow()
        material = seed_attribute(uow, "material", "Text", configuration={"maxLength": 5})
        dto = CreateProductHandler(uow).handle(
            "Shirt", "1", attribute_values={material: "Linen"}, metadata={"origin": "PT"}
        )
        assert dto.attributes == {material: "Linen"}
        assert dto.metadata == {"origin": "PT"}

        with pytest.raises(InvalidAttributeValueError):
            CreateProductHandler(uow).handle(
                "Hoodie", "1", attribute_values={material: "Polyester"}
            )

    def test_unknown_attribute_rejected(self):
        with pytest.raises(EntityNotFoundError):
            CreateProductHandler(make_uow()).handle("Shirt", "1", attribute_values={"x": 1})


class TestUpdateProduct:

    def test_update_keeps_currency(self):
        uow = make_uow()
        created = CreateProductHandler(uow, default_currency="EUR").handle("Shirt", "1")
        dto = UpdateProductHandler(uow).handle(created.id, "Shirt", "shirt", "2.50")
        assert dto.base_price == "2.50 EUR"
        assert dto.version == 2

    def test_own_slug_and_sku_do_not_conflict(self):
        uow = make_uow()
        created = CreateProductHandler(uow).handle("Shirt", "1", sku="S1")
        dto = UpdateProductHandler(uow).handle(created.id, "Shirt!", "shirt", "1", sku="S1")
        assert dto.name == "Shirt!"

    def test_taken_slug_rejected(self):
        uow = make_uow()
        CreateProductHandler(uow).handle("Hoodie", "1")
        created = CreateProductHandler(uow).handle("Shirt", "1")
        with pytest.raises(DuplicateSlugError):
            UpdateProductHandler(uow).handle(created.id, "Shirt", "hoodie", "1")

    def test_replaces_categories(self):
        uow = make_uow()
        first = seed_category(uow, "A")
        second = seed_category(uow, "B")
        created = CreateProductHandler(uow).handle("Shirt", "1", category_ids=[first])
        dto = UpdateProductHandler(uow).handle(
            created.id, "Shirt", "shirt", "1", category_ids=[second]
        )
        assert dto.category_ids == [second]

    def test_status(self):
        uow = make_uow()
        created = CreateProductHandler(uow).handle("Shirt", "1")
        assert UpdateProductStatusHandler(uow).handle(created.id, False).is_active is False


class TestSetProductAttribute:

    def test_assign_change_and_remove(self):
        uow = make_uow()
        material = seed_attribute(uow, "material", "Text")
        created = CreateProductHandler(uow).handle("Shirt", "1")
        handler = SetProductAttributeHandler(uow)

        assert handler.handle(created.id, material, "Cotton").attributes == {material: "Cotton"}
        assert handler.handle(created.id, material, "Linen").attributes == {material: "Linen"}
        assert handler.handle(created.id, material, None).attributes == {}

    def test_stores_normalized_value(self):
        uow = make_uow()
        weight = seed_attribute(uow, "weight", "Number")
        created = CreateProductHandler(uow).handle("Shirt", "1")
        dto = SetProductAttributeHandler(uow).handle(created.id, weight, "0.250")
        assert dto.attributes == {weight: "0.25"}

    def test_clear_attributes(self):
        uow = make_uow()
        material = seed_attribute(uow, "material", "Text")
        created = CreateProductHandler(uow).handle(
            "Shirt", "1", attribute_values={material: "Cotton"}
        )

        dto = ClearProductAttributesHandler(uow).handle(created.id)

        assert dto.attributes == {}
        assert uow.products.get_by_id(created.id).attributes == {}

    def test_clear_attributes_of_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            ClearProductAttributesHandler(make_uow()).handle("nope")


class TestProductDetailAndDelete:

    def test_detail_includes_variants_with_effective_price(self):
        uow = make_uow()
        category_id = seed_category(uow, "Clothing")
        created = CreateProductHandler(uow).handle("Shirt", "15", category_ids=[category_id])
        seed_variant(uow, created.id, sku="S-1")
        seed_variant(uow, created.id, sku="S-2", price="20")

        detail = GetProductDetailHandler(uow).handle("shirt")

        assert detail.product.id == created.id
        assert detail.category_names == ["Clothing"]
        prices = sorted((v.sku, v.price, v.has_price_override) for v in detail.variants)
        assert prices == [("S-1", "15.00 USD", False), ("S-2", "20.00 USD", True)]

    def test_delete_removes_variants(self):
        uow = make_uow()
        created = CreateProductHandler(uow).handle("Shirt", "1")
        variant_id = seed_variant(uow, created.id)

        DeleteProductHandler(uow).handle(created.id)

        assert uow.products.get_by_id(created.id) is None
        assert uow.variants.get_by_id(variant_id) is None

    def test_delete_unknown(self):
        with pytest.raises(EntityNotFoundError, match="Product with ID 'x'"):
            DeleteProductHandler(make_uow()).handle("x")
