"""Category aggregate: one node of the catalog tree.

Each category stores its depth (``level``) and a materialized ``path`` built
from its ancestors' slugs, e.g. ``/electronics/phones``.  The path makes
ancestor/descendant checks a prefix comparison instead of a tree walk.
"""

from __future__ import annotations

from dataclasses import dataclass

from ecom.domain.exceptions import CircularReferenceError, ValidationError
from ecom.domain.model.aggregate import AggregateRoot
from ecom.domain.model.value_objects import Slug


@dataclass
class Category(AggregateRoot):
    """Aggregate root for catalog categories.

    New categories are roots; ``reparent`` moves them under another node.
    Slug uniqueness and the deletion guards need repository lookups, so
    callers check them before invoking ``create``, ``update`` or deleting.
    """

    id: str
    name: str
    slug: Slug
    description: str = ""
    parent_id: str | None = None
    level: int = 0
    path: str = ""
    is_active: bool = True
    version: int = 0

    def __post_init__(self) -> None:
        if not self.path:
            self.path = f"/{self.slug}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        name: str,
        slug: str | Slug | None = None,
        description: str = "",
    ) -> Category:
        """Create an active root category.

        The slug is derived from the name when not given explicitly.
        """
        name = _require_name(name)
        return Category(
            id=id,
            name=name,
            slug=_resolve_slug(name, slug),
            description=(description or "").strip(),
        )

    @staticmethod
    def create_inactive(
        id: str,
        name: str,
        slug: str | Slug | None = None,
        description: str = "",
    ) -> Category:
        category = Category.create(id, name, slug, description)
        category.is_active = False
        return category

    # --- Mutations ------------------------------------------------------------

    def update(self, name: str, slug: str | Slug, description: str | None = None) -> None:
        """Rename the category; the path's last segment follows the slug.

        Descendant paths are not touched here; the hierarchy service
        rewrites them.
        """
        self.name = _require_name(name)
        if slug is None or not str(slug).strip():
            raise ValidationError("Category slug is required", code="Category.SlugRequired")
        self.slug = slug if isinstance(slug, Slug) else Slug(str(slug).strip())
        if description is not None:
            self.description = description.strip()
        self.path = self._own_path(self._parent_path())

    def reparent(self, parent: Category | None) -> None:
        """Move under *parent*, or make this a root when *parent* is None."""
        if parent is None:
            self.set_hierarchy(None, 0, f"/{self.slug}")
            return
        if parent.id == self.id:
            raise CircularReferenceError("Category cannot be its own parent")
        if parent.is_descendant_of(self):
            raise CircularReferenceError(
                f"Category '{parent.name}' is a descendant of '{self.name}'"
            )
        self.set_hierarchy(parent.id, parent.level + 1, f"{parent.path}/{self.slug}")

    def set_hierarchy(self, parent_id: str | None, level: int, path: str) -> None:
        if level < 0:
            raise ValidationError("Category level cannot be negative")
        if not path.startswith("/"):
            raise ValidationError("Category path must start with '/'")
        self.parent_id = parent_id
        self.level = level
        self.path = path

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def set_active(self, is_active: bool) -> None:
        if is_active:
            self.activate()
        else:
            self.deactivate()

    # --- Queries --------------------------------------------------------------

    def is_descendant_of(self, other: Category) -> bool:
        return self.path.startswith(other.path + "/")

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    # --- Internal helpers -----------------------------------------------------

    def _parent_path(self) -> str:
        if self.parent_id is None:
            return ""
        return self.path.rsplit("/", 1)[0]

    def _own_path(self, parent_path: str) -> str:
        return f"{parent_path}/{self.slug}"


def _require_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Category name is required", code="Category.NameRequired")
    return name.strip()


def _resolve_slug(name: str, slug: str | Slug | None) -> Slug:
    if isinstance(slug, Slug):
        return slug
    if slug is None or not slug.strip():
        return Slug.from_name(name)
    return Slug(slug.strip())
