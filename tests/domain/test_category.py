"""Unit tests for the Category aggregate."""

import pytest

from ecom.domain.exceptions import CircularReferenceError, ValidationError
from ecom.domain.model.category import Category


def _tree() -> tuple[Category, Category, Category]:
    """electronics > phones > smartphones"""
    electronics = Category.create("c1", "Electronics")
    phones = Category.create("c2", "Phones")
    phones.reparent(electronics)
    smartphones = Category.create("c3", "Smartphones")
    smartphones.reparent(phones)
    return electronics, phones, smartphones


class TestCreate:

    def test_new_category_is_active_root(self):
        category = Category.create("c1", "Electronics")
        assert category.is_active is True
        assert category.is_root
        assert category.level == 0
        assert category.path == "/electronics"

    def test_slug_derived_from_name(self):
        assert Category.create("c1", "Home & Garden").slug.value == "home-garden"

    def test_explicit_slug_kept(self):
        assert Category.create("c1", "Phones", "mobile").path == "/mobile"

    def test_create_inactive(self):
        assert Category.create_inactive("c1", "Archive").is_active is False

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Category.create("c1", "  ")
        assert exc_info.value.code == "Category.NameRequired"

    def test_description_trimmed(self):
        assert Category.create("c1", "A", description="  text ").description == "text"


class TestReparent:

    def test_child_level_and_path(self):
        _, phones, smartphones = _tree()
        assert phones.level == 1
        assert phones.path == "/electronics/phones"
        assert smartphones.level == 2
        assert smartphones.path == "/electronics/phones/smartphones"
        assert smartphones.parent_id == "c2"

    def test_move_to_root(self):
        _, phones, _ = _tree()
        phones.reparent(None)
        assert phones.is_root
        assert phones.level == 0
        assert phones.path == "/phones"

    def test_own_parent_rejected(self):
        electronics, _, _ = _tree()
        with pytest.raises(CircularReferenceError, match="its own parent"):
            electronics.reparent(electronics)

    def test_descendant_as_parent_rejected(self):
        electronics, _, smartphones = _tree()
        with pytest.raises(CircularReferenceError) as exc_info:
            electronics.reparent(smartphones)
        assert exc_info.value.code == "Category.CircularReference"
        assert electronics.path == "/electronics"

    def test_is_descendant_of_uses_whole_segments(self):
        phones = Category.create("c1", "Phones")
        accessories = Category.create("c2", "Phones Accessories", "phones-accessories")
        assert not accessories.is_descendant_of(phones)


class TestUpdate:

    def test_rename_root_rewrites_path(self):
        category = Category.create("c1", "Electronics")
        category.update("Gadgets", "gadgets")
        assert category.name == "Gadgets"
        assert category.path == "/gadgets"

    def test_rename_child_keeps_parent_prefix(self):
        _, phones, _ = _tree()
        phones.update("Mobiles", "mobiles", "All mobiles")
        assert phones.path == "/electronics/mobiles"
        assert phones.description == "All mobiles"

    def test_description_none_keeps_existing(self):
        category = Category.create("c1", "A", description="keep")
        category.update("B", "b")
        assert category.description == "keep"

    def test_blank_slug_rejected(self):
        category = Category.create("c1", "A")
        with pytest.raises(ValidationError) as exc_info:
            category.update("A", " ")
        assert exc_info.value.code == "Category.SlugRequired"


class TestStatus:

    def test_deactivate_and_activate(self):
        category = Category.create("c1", "A")
        category.deactivate()
        assert category.is_active is False
        category.set_active(True)
        assert category.is_active is True

    def test_set_hierarchy_rejects_relative_path(self):
        category = Category.create("c1", "A")
        with pytest.raises(ValidationError, match="must start with '/'"):
            category.set_hierarchy(None, 0, "a")
