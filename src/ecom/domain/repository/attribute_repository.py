"""Abstract repository for the Attribute aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.attribute import Attribute


class AttributeRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique attribute ID."""

    @abstractmethod
    def get_by_id(self, attribute_id: str) -> Attribute | None:
        """Return an attribute by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Attribute | None:
        """Return the attribute with system name *name*, or None."""

    @abstractmethod
    def list_all(self) -> list[Attribute]:
        """Return every attribute."""

    @abstractmethod
    def list_variant_attributes(self) -> list[Attribute]:
        """Return the attributes flagged ``is_variant``."""

    @abstractmethod
    def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        """True if an attribute other than *exclude_id* is called *name*."""

    @abstractmethod
    def add(self, attribute: Attribute) -> None:
        """Register a new attribute with the unit of work."""

    @abstractmethod
    def update(self, attribute: Attribute) -> None:
        """Register a changed attribute with the unit of work."""

    @abstractmethod
    def delete(self, attribute: Attribute) -> None:
        """Register an attribute for deletion with the unit of work."""
