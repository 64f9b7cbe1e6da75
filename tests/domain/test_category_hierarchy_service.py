"""Unit tests for the CategoryHierarchyService domain service."""

import pytest

from ecom.domain.exceptions import (
    CannotDeleteWithChildrenError,
    CannotDeleteWithProductsError,
    CircularReferenceError,
    DuplicateSlugError,
    EntityNotFoundError,
)
from ecom.domain.service.category_hierarchy_service import CategoryHierarchyService
from tests.fakes import make_uow, seed_category, seed_product


def _setup():
    """electronics > phones > smartphones, plus a separate 'sale' root."""
    uow = make_uow()
    electronics = seed_category(uow, "Electronics")
    phones = seed_category(uow, "Phones", parent_id=electronics)
    smartphones = seed_category(uow, "Smartphones", parent_id=phones)
    sale = seed_category(uow, "Sale")
    service = CategoryHierarchyService(uow.categories, uow.products)
    ids = {"electronics": electronics, "phones": phones, "smartphones": smartphones, "sale": sale}
    return uow, service, ids


class TestReparent:

    def test_moving_subtree_rewrites_descendants(self):
        uow, service, ids = _setup()
        phones = uow.categories.get_by_id(ids["phones"])

        moved = service.reparent(phones, ids["sale"])

        smartphones = uow.categories.get_by_id(ids["smartphones"])
        assert phones.path == "/sale/phones"
        assert smartphones.path == "/sale/phones/smartphones"
        assert smartphones.level == 2
        assert [c.id for c in moved] == [ids["smartphones"]]

    def test_moving_to_root_shifts_levels_up(self):
        uow, service, ids = _setup()
        phones = uow.categories.get_by_id(ids["phones"])

        service.reparent(phones, None)

        smartphones = uow.categories.get_by_id(ids["smartphones"])
        assert phones.level == 0
        assert smartphones.level == 1
        assert smartphones.path == "/phones/smartphones"

    def test_moving_under_descendant_rejected(self):
        uow, service, ids = _setup()
        electronics = uow.categories.get_by_id(ids["electronics"])
        with pytest.raises(CircularReferenceError):
            service.reparent(electronics, ids["smartphones"])
        assert electronics.path == "/electronics"

    def test_own_parent_rejected(self):
        uow, service, ids = _setup()
        phones = uow.categories.get_by_id(ids["phones"])
        with pytest.raises(CircularReferenceError, match="its own parent"):
            service.reparent(phones, ids["phones"])

    def test_missing_parent_rejected(self):
        uow, service, ids = _setup()
        phones = uow.categories.get_by_id(ids["phones"])
        with pytest.raises(EntityNotFoundError) as exc_info:
            service.reparent(phones, "nope")
        assert exc_info.value.code == "Category.NotFound"

    def test_changes_are_pending_until_commit(self):
        uow, service, ids = _setup()
        phones = uow.categories.get_by_id(ids["phones"])
        service.reparent(phones, ids["sale"])
        uow.rollback()

        assert uow.categories.get_by_id(ids["smartphones"]).path == (
            "/electronics/phones/smartphones"
        )


class TestRename:

    def test_rename_cascades_new_segment(self):
        uow, service, ids = _setup()
        electronics = uow.categories.get_by_id(ids["electronics"])

        service.rename(electronics, "Tech", "tech")

        assert uow.categories.get_by_id(ids["phones"]).path == "/tech/phones"
        assert uow.categories.get_by_id(ids["smartphones"]).path == "/tech/phones/smartphones"

    def test_same_slug_does_not_conflict_with_itself(self):
        uow, service, ids = _setup()
        electronics = uow.categories.get_by_id(ids["electronics"])
        assert service.rename(electronics, "Electronics & More", "electronics") == []
        assert electronics.name == "Electronics & More"

    def test_duplicate_slug_rejected(self):
        uow, service, ids = _setup()
        electronics = uow.categories.get_by_id(ids["electronics"])
        with pytest.raises(DuplicateSlugError) as exc_info:
            service.rename(electronics, "Sale", "sale")
        assert exc_info.value.code == "Category.DuplicateSlug"


class TestEnsureDeletable:

    def test_category_with_children_rejected(self):
        uow, service, ids = _setup()
        with pytest.raises(CannotDeleteWithChildrenError):
            service.ensure_deletable(uow.categories.get_by_id(ids["phones"]))

    def test_category_with_products_rejected(self):
        uow, service, ids = _setup()
        seed_product(uow, category_ids=(ids["sale"],))
        with pytest.raises(CannotDeleteWithProductsError):
            service.ensure_deletable(uow.categories.get_by_id(ids["sale"]))

    def test_leaf_without_products_is_deletable(self):
        uow, service, ids = _setup()
        service.ensure_deletable(uow.categories.get_by_id(ids["smartphones"]))
