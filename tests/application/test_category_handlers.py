"""Integration tests for the category use cases.

Run against a JsonUnitOfWork over an in-memory store.
"""

import pytest

from ecom.application.category_tree import CategoryTreeHandler
from ecom.application.create_category import CreateCategoryHandler
from ecom.application.delete_category import DeleteCategoryHandler
from ecom.application.get_category import GetCategoryHandler
from ecom.application.list_child_categories import ListChildCategoriesHandler
from ecom.application.update_category import UpdateCategoryHandler
from ecom.application.update_category_parent import UpdateCategoryParentHandler
from ecom.application.update_category_status import UpdateCategoryStatusHandler
from ecom.domain.exceptions import (
    CannotDeleteWithChildrenError,
    CannotDeleteWithProductsError,
    CircularReferenceError,
    DuplicateSlugError,
    EntityNotFoundError,
)
from tests.fakes import make_uow, seed_product


def _setup():
    uow = make_uow()
    create = CreateCategoryHandler(uow)
    electronics = create.handle("Electronics")
    phones = create.handle("Phones", parent_id=electronics.id)
    return uow, electronics, phones


class TestCreateCategory:

    def test_creates_root(self):
        uow = make_uow()
        dto = CreateCategoryHandler(uow).handle("Electronics", description="Gadgets")
        assert dto.slug == "electronics"
        assert dto.path == "/electronics"
        assert dto.level == 0
        assert dto.version == 1
        assert uow.categories.get_by_id(dto.id).description == "Gadgets"

    def test_creates_child_under_parent(self):
        _, electronics, phones = _setup()
        assert phones.parent_id == electronics.id
        assert phones.level == 1
        assert phones.path == "/electronics/phones"

    def test_duplicate_slug_rejected(self):
        uow, _, _ = _setup()
        with pytest.raises(DuplicateSlugError, match="slug 'phones'"):
            CreateCategoryHandler(uow).handle("Phones")

    def test_missing_parent_rejected_and_nothing_written(self):
        uow = make_uow()
        with pytest.raises(EntityNotFoundError):
            CreateCategoryHandler(uow).handle("Phones", parent_id="nope")
        assert uow.categories.list_all() == []

    def test_inactive(self):
        uow = make_uow()
        dto = CreateCategoryHandler(uow).handle("Archive", is_active=False)
        assert dto.is_active is False


class TestUpdateCategory:

    def test_rename_cascades_to_children(self):
        uow, electronics, phones = _setup()
        dto = UpdateCategoryHandler(uow).handle(electronics.id, "Tech", "tech")
        assert dto.path == "/tech"
        assert dto.version == 2
        assert uow.categories.get_by_id(phones.id).path == "/tech/phones"

    def test_keeping_own_slug_is_allowed(self):
        uow, electronics, _ = _setup()
        dto = UpdateCategoryHandler(uow).handle(
            electronics.id, "Electronics", "electronics", description="All gadgets"
        )
        assert dto.description == "All gadgets"

    def test_taken_slug_rejected(self):
        uow, electronics, _ = _setup()
        with pytest.raises(DuplicateSlugError):
            UpdateCategoryHandler(uow).handle(electronics.id, "Phones", "phones")

    def test_status_can_change_with_rename(self):
        uow, electronics, _ = _setup()
        dto = UpdateCategoryHandler(uow).handle(
            electronics.id, "Electronics", "electronics", is_active=False
        )
        assert dto.is_active is False

    def test_not_found(self):
        with pytest.raises(EntityNotFoundError, match="Category with ID 'x' not found"):
            UpdateCategoryHandler(make_uow()).handle("x", "A", "a")


class TestUpdateCategoryParent:

    def test_electronics_under_phones_is_circular(self):
        uow, electronics, phones = _setup()
        with pytest.raises(CircularReferenceError) as exc_info:
            UpdateCategoryParentHandler(uow).handle(electronics.id, phones.id)
        assert exc_info.value.code == "Category.CircularReference"
        stored = uow.categories.get_by_id(electronics.id)
        assert stored.parent_id is None
        assert stored.version == 1

    def test_move_to_root(self):
        uow, _, phones = _setup()
        dto = UpdateCategoryParentHandler(uow).handle(phones.id, None)
        assert dto.parent_id is None
        assert dto.path == "/phones"

    def test_move_cascades_to_grandchildren(self):
        uow, electronics, phones = _setup()
        smartphones = CreateCategoryHandler(uow).handle("Smartphones", parent_id=phones.id)
        sale = CreateCategoryHandler(uow).handle("Sale")

        UpdateCategoryParentHandler(uow).handle(phones.id, sale.id)

        moved = uow.categories.get_by_id(smartphones.id)
        assert moved.path == "/sale/phones/smartphones"
        assert moved.level == 2


class TestUpdateCategoryStatus:

    def test_deactivate(self):
        uow, electronics, _ = _setup()
        dto = UpdateCategoryStatusHandler(uow).handle(electronics.id, False)
        assert dto.is_active is False
        assert uow.categories.get_by_id(electronics.id).is_active is False


class TestDeleteCategory:

    def test_parent_with_children_rejected(self):
        uow, electronics, _ = _setup()
        with pytest.raises(CannotDeleteWithChildrenError):
            DeleteCategoryHandler(uow).handle(electronics.id)

    def test_category_with_products_rejected(self):
        uow, _, phones = _setup()
        seed_product(uow, category_ids=(phones.id,))
        with pytest.raises(CannotDeleteWithProductsError) as exc_info:
            DeleteCategoryHandler(uow).handle(phones.id)
        assert exc_info.value.code == "Category.CannotDeleteWithProducts"

    def test_leaf_deleted(self):
        uow, electronics, phones = _setup()
        DeleteCategoryHandler(uow).handle(phones.id)
        assert uow.categories.get_by_id(phones.id) is None
        DeleteCategoryHandler(uow).handle(electronics.id)
        assert uow.categories.list_all() == []


class TestCategoryQueries:

    def test_get_by_id_or_slug(self):
        uow, _, phones = _setup()
        assert GetCategoryHandler(uow).handle(phones.id).name == "Phones"
        assert GetCategoryHandler(uow).handle("phones").id == phones.id

    def test_get_unknown(self):
        with pytest.raises(EntityNotFoundError):
            GetCategoryHandler(make_uow()).handle("missing")

    def test_children_sorted_by_name(self):
        uow, electronics, _ = _setup()
        CreateCategoryHandler(uow).handle("Audio", parent_id=electronics.id)
        names = [c.name for c in ListChildCategoriesHandler(uow).handle(electronics.id)]
        assert names == ["Audio", "Phones"]

    def test_roots_when_no_parent(self):
        uow, electronics, _ = _setup()
        roots = ListChildCategoriesHandler(uow).handle()
        assert [c.id for c in roots] == [electronics.id]

    def test_tree(self):
        uow, electronics, phones = _setup()
        tree = CategoryTreeHandler(uow).handle()
        assert len(tree) == 1
        assert tree[0].id == electronics.id
        assert [child.id for child in tree[0].children] == [phones.id]

    def test_active_only_tree_prunes_inactive_subtree(self):
        uow, electronics, _ = _setup()
        CreateCategoryHandler(uow).handle("Sale")
        UpdateCategoryStatusHandler(uow).handle(electronics.id, False)
        tree = CategoryTreeHandler(uow).handle(active_only=True)
        assert [node.name for node in tree] == ["Sale"]
