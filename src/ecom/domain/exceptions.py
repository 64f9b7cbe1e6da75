"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Every exception carries a stable ``code`` (``"<Entity>.<Reason>"``) that
callers can branch on without parsing the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "Domain.Error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "Validation.Failed"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "Entity.NotFound"

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(
            f"{entity} with ID '{entity_id}' not found", code=f"{entity}.NotFound"
        )
        self.entity = entity
        self.entity_id = entity_id


# --- Uniqueness ---------------------------------------------------------------


class DuplicateError(ValidationError):
    """A uniqueness check found the value already taken."""


class DuplicateSlugError(DuplicateError):

    def __init__(self, entity: str, slug: str) -> None:
        super().__init__(
            f"{entity} with slug '{slug}' already exists",
            code=f"{entity}.DuplicateSlug",
        )
        self.slug = slug


class DuplicateSkuError(DuplicateError):

    def __init__(self, entity: str, sku: str) -> None:
        super().__init__(
            f"{entity} with SKU '{sku}' already exists",
            code=f"{entity}.DuplicateSku",
        )
        self.sku = sku


class DuplicateNameError(DuplicateError):

    def __init__(self, entity: str, name: str) -> None:
        super().__init__(
            f"{entity} with name '{name}' already exists",
            code=f"{entity}.DuplicateName",
        )
        self.name = name


# --- Category hierarchy -------------------------------------------------------


class CircularReferenceError(ValidationError):
    code = "Category.CircularReference"

    def __init__(self, message: str = "Category cannot be its own ancestor") -> None:
        super().__init__(message)


class CannotDeleteWithChildrenError(ValidationError):
    code = "Category.CannotDeleteWithChildren"

    def __init__(self) -> None:
        super().__init__("Cannot delete a category that has child categories")


class CannotDeleteWithProductsError(ValidationError):
    code = "Category.CannotDeleteWithProducts"

    def __init__(self) -> None:
        super().__init__("Cannot delete a category that has products assigned")


# --- Attributes and variants --------------------------------------------------


class InvalidConfigurationError(ValidationError):
    code = "Attribute.InvalidConfiguration"


class InvalidAttributeValueError(ValidationError):
    code = "Attribute.InvalidValue"

    def __init__(self, attribute_name: str, reason: str) -> None:
        super().__init__(f"Invalid value for attribute '{attribute_name}': {reason}")
        self.attribute_name = attribute_name


class AttributeInUseError(ValidationError):
    code = "Attribute.InUse"

    def __init__(self, attribute_name: str) -> None:
        super().__init__(
            f"Attribute '{attribute_name}' is used by products or variants"
        )


class NotVariantAttributeError(ValidationError):
    code = "Attribute.NotVariantAttribute"

    def __init__(self, attribute_name: str) -> None:
        super().__init__(
            f"Attribute '{attribute_name}' is not marked as a variant attribute"
        )
        self.attribute_name = attribute_name


class DuplicateCombinationError(ValidationError):
    code = "ProductVariant.DuplicateCombination"

    def __init__(self, conflicting_variant_id: str) -> None:
        super().__init__(
            "Another variant of this product already has the same attribute "
            f"combination (variant '{conflicting_variant_id}')"
        )
        self.conflicting_variant_id = conflicting_variant_id


# --- Amounts and stock --------------------------------------------------------


class NegativeAmountError(ValidationError):
    code = "Money.NegativeAmount"


class NegativeStockError(ValidationError):
    code = "ProductVariant.NegativeStockQuantity"

    def __init__(self, message: str = "Stock quantity cannot be negative") -> None:
        super().__init__(message)


class InsufficientStockError(ValidationError):
    code = "ProductVariant.InsufficientStock"

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock (requested {requested}, available {available})"
        )


# --- Persistence --------------------------------------------------------------


class ConcurrencyConflictError(DomainException):
    """The stored version no longer matches the version captured at load time.

    Callers may reload the aggregate and retry; the core never retries.
    """

    code = "Concurrency.Conflict"

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        expected_version: int,
        actual_version: int | None,
    ) -> None:
        if actual_version is None:
            detail = "it no longer exists"
        else:
            detail = f"stored version is {actual_version}"
        super().__init__(
            f"{entity_type} '{entity_id}' was modified by another operation "
            f"(expected version {expected_version}, {detail})"
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class OperationFailedError(DomainException):
    """An unexpected infrastructure failure, translated at the handler boundary."""

    code = "Operation.Failed"
