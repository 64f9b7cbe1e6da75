"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from ecom.domain.exceptions import NegativeAmountError, ValidationError

_SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class Slug:
    """URL-safe identifier derived from a display name."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValidationError("Slug is required", code="Slug.Required")
        if not _SLUG_PATTERN.match(self.value):
            raise ValidationError(
                f"Slug '{self.value}' may only contain lowercase letters, "
                "digits and hyphens",
                code="Slug.Invalid",
            )

    @staticmethod
    def from_name(name: str) -> Slug:
        """Derive a slug: lowercase, strip non-word chars, whitespace -> hyphen."""
        text = (name or "").strip().lower()
        text = re.sub(r"[^\w\s-]", "", text)
        text = re.sub(r"[\s_]+", "-", text)
        # \w matches non-ASCII letters; keep only what the slug pattern allows
        text = re.sub(r"[^a-z0-9-]", "", text)
        text = re.sub(r"-{2,}", "-", text).strip("-")
        return Slug(text)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Negative amounts are only
    allowed for adjustments (refunds, corrections) created explicitly
    through ``Money.adjustment``.
    """

    amount: Decimal
    currency: str = "USD"
    allow_negative: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not isinstance(self.currency, str) or not _CURRENCY_PATTERN.match(
            self.currency
        ):
            raise ValidationError(
                f"Currency must be a 3-letter code, got {self.currency!r}",
                code="Money.InvalidCurrency",
            )
        if self.amount < Decimal("0") and not self.allow_negative:
            raise NegativeAmountError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(
            self.amount + other.amount,
            self.currency,
            self.allow_negative or other.allow_negative,
        )

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0") and not self.allow_negative:
            raise NegativeAmountError(
                "Money subtraction would result in a negative amount"
            )
        return Money(result, self.currency, self.allow_negative)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency, self.allow_negative)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}",
                code="Money.CurrencyMismatch",
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        return Money(_to_decimal(amount), currency)

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0"), currency)

    @staticmethod
    def adjustment(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """A refund or correction amount, which may be negative."""
        return Money(_to_decimal(amount), currency, allow_negative=True)


def _to_decimal(amount: str | float | int | Decimal) -> Decimal:
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid money amount: {amount!r}")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid money amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid money amount: {amount!r}")
    return value
