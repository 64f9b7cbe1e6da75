"""Attribute aggregate and its per-type configuration schemas.

An attribute describes one product property (colour, size, weight, ...).
Its ``type`` selects exactly one configuration record shape; the record
validates itself when built, so a malformed configuration can never be
stored on an attribute.  The same record also validates the *values*
assigned to products and variants for that attribute and returns them in
the normalized form that is stored and compared.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Mapping

from ecom.domain.exceptions import (
    InvalidAttributeValueError,
    InvalidConfigurationError,
    ValidationError,
)
from ecom.domain.model.aggregate import AggregateRoot

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")

NUMBER_UNITS = ("kg", "g", "lb", "cm", "m", "inches", "ft", "L", "ml", "W", "hours")
BOOLEAN_FORMATS = ("switch", "checkbox", "yes-no", "true-false")
SELECT_DISPLAY_TYPES = ("dropdown", "button", "swatch", "radio")
DIMENSION_UNITS = ("cm", "m", "in", "ft")
WEIGHT_UNITS = ("kg", "g", "lb", "oz")


class AttributeType(Enum):
    TEXT = "Text"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    SELECT = "Select"
    COLOR = "Color"
    DATE = "Date"
    DIMENSIONS = "Dimensions"
    WEIGHT = "Weight"

    @staticmethod
    def parse(raw: str | AttributeType) -> AttributeType:
        if isinstance(raw, AttributeType):
            return raw
        for member in AttributeType:
            if str(raw).strip().lower() == member.value.lower():
                return member
        allowed = ", ".join(m.value for m in AttributeType)
        raise ValidationError(
            f"Unknown attribute type {raw!r} (expected one of: {allowed})",
            code="Attribute.InvalidType",
        )


# ---------------------------------------------------------------------------
# Key and value parsing helpers
# ---------------------------------------------------------------------------


def _snake_key(key: str) -> str:
    """``minLength`` / ``min-length`` / ``min_length`` -> ``min_length``."""
    key = re.sub(r"(?<!^)(?=[A-Z])", "_", str(key).strip())
    return key.replace("-", "_").lower()


def _camel_key(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _parse_int(key: str, raw: Any, minimum: int = 0, maximum: int | None = None) -> int:
    if isinstance(raw, bool):
        raise InvalidConfigurationError(f"'{key}' must be an integer")
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError(f"'{key}' must be an integer") from exc
    if value < minimum:
        raise InvalidConfigurationError(f"'{key}' cannot be less than {minimum}")
    if maximum is not None and value > maximum:
        raise InvalidConfigurationError(f"'{key}' cannot be greater than {maximum}")
    return value


def _parse_decimal(key: str, raw: Any, non_negative: bool = False) -> Decimal:
    value = _to_decimal(raw)
    if value is None:
        raise InvalidConfigurationError(f"'{key}' must be a number")
    if non_negative and value < 0:
        raise InvalidConfigurationError(f"'{key}' cannot be negative")
    return value


def _parse_choice(key: str, raw: Any, choices: tuple[str, ...]) -> str:
    if raw not in choices:
        raise InvalidConfigurationError(
            f"'{key}' must be one of: {', '.join(choices)} (got {raw!r})"
        )
    return raw


def _parse_bool(key: str, raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise InvalidConfigurationError(f"'{key}' must be true or false")
    return raw


def _to_decimal(raw: Any) -> Decimal | None:
    """Coerce a numeric value to Decimal, or return None if it is not one."""
    if isinstance(raw, bool) or raw is None:
        return None
    if not isinstance(raw, (int, float, Decimal, str)):
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _decimal_places(value: Decimal) -> int:
    exponent = value.normalize().as_tuple().exponent
    return max(0, -exponent) if isinstance(exponent, int) else 0


def _normalize_number(value: Decimal) -> int | str:
    """Whole numbers as int, anything else as plain decimal text."""
    value = value.normalize()
    if value == value.to_integral_value():
        return int(value)
    return format(value, "f")


def _wire(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, tuple):
        return [_wire(v) for v in value]
    if isinstance(value, ColorOption):
        return {"name": value.name, "hex": value.hex}
    return value


# ---------------------------------------------------------------------------
# Configuration records (one per attribute type)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColorOption:
    name: str
    hex: str


@dataclass(frozen=True)
class AttributeConfiguration(ABC):
    """Base for the per-type configuration records.

    Subclasses declare their fields, parse raw values in ``_parse`` and
    check cross-field rules in ``_check``.
    """

    attribute_type: ClassVar[AttributeType]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> AttributeConfiguration:
        allowed = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for raw_key, raw_value in (mapping or {}).items():
            key = _snake_key(raw_key)
            if key not in allowed:
                raise InvalidConfigurationError(
                    f"Configuration key '{raw_key}' is not valid for "
                    f"{cls.attribute_type.value} attributes"
                )
            if raw_value is None:
                continue
            kwargs[key] = cls._parse(key, raw_value)
        config = cls(**kwargs)
        config._check()
        return config

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        return raw

    def _check(self) -> None:
        pass

    def to_mapping(self) -> dict[str, Any]:
        """Wire shape: camelCase keys, unset keys omitted."""
        result: dict[str, Any] = {}
        for name in (f.name for f in fields(self)):
            value = getattr(self, name)
            if value is None or value == ():
                continue
            result[_camel_key(name)] = _wire(value)
        return result

    def with_value(self, key: str, value: Any) -> AttributeConfiguration:
        """Return a copy with one key set (or removed when ``value`` is None)."""
        mapping = {_snake_key(k): v for k, v in self.to_mapping().items()}
        if value is None:
            mapping.pop(_snake_key(key), None)
        else:
            mapping[_snake_key(key)] = value
        return type(self).from_mapping(mapping)

    @abstractmethod
    def validate_value(self, attribute_name: str, value: Any) -> Any:
        """Check *value* and return its normalized, JSON-safe form.

        Values that mean the same thing (a colour's name and its hex,
        ``42`` and ``"42"``) normalize to the same form, which is what
        products and variants store and what combination keys compare.
        """


@dataclass(frozen=True)
class TextConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.TEXT

    min_length: int | None = None
    max_length: int | None = None

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        return _parse_int(key, raw)

    def _check(self) -> None:
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.max_length < self.min_length
        ):
            raise InvalidConfigurationError("maxLength cannot be less than minLength")

    def validate_value(self, attribute_name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise InvalidAttributeValueError(attribute_name, "expected text")
        if self.min_length is not None and len(value) < self.min_length:
            raise InvalidAttributeValueError(
                attribute_name, f"must be at least {self.min_length} characters"
            )
        if self.max_length is not None and len(value) > self.max_length:
            raise InvalidAttributeValueError(
                attribute_name, f"must be at most {self.max_length} characters"
            )
        return value


@dataclass(frozen=True)
class NumberConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.NUMBER

    min: Decimal | None = None
    max: Decimal | None = None
    step: Decimal | None = None
    unit: str | None = None

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        if key == "unit":
            return _parse_choice(key, raw, NUMBER_UNITS)
        value = _parse_decimal(key, raw)
        if key == "step" and value <= 0:
            raise InvalidConfigurationError("'step' must be greater than zero")
        return value

    def _check(self) -> None:
        if self.min is not None and self.max is not None and self.max < self.min:
            raise InvalidConfigurationError("max cannot be less than min")

    def validate_value(self, attribute_name: str, value: Any) -> int | str:
        number = _to_decimal(value)
        if number is None:
            raise InvalidAttributeValueError(attribute_name, "expected a number")
        if self.min is not None and number < self.min:
            raise InvalidAttributeValueError(
                attribute_name, f"must be at least {self.min}"
            )
        if self.max is not None and number > self.max:
            raise InvalidAttributeValueError(
                attribute_name, f"must be at most {self.max}"
            )
        return _normalize_number(number)


@dataclass(frozen=True)
class BooleanConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.BOOLEAN

    format: str | None = None
    default_value: bool | None = None

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        if key == "format":
            return _parse_choice(key, raw, BOOLEAN_FORMATS)
        return _parse_bool(key, raw)

    def validate_value(self, attribute_name: str, value: Any) -> bool:
        if not isinstance(value, bool):
            raise InvalidAttributeValueError(attribute_name, "expected true or false")
        return value


@dataclass(frozen=True)
class SelectConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.SELECT

    values: tuple[str, ...] = ()
    display_type: str | None = None

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        if key == "display_type":
            return _parse_choice(key, raw, SELECT_DISPLAY_TYPES)
        if not isinstance(raw, (list, tuple)) or not raw:
            raise InvalidConfigurationError("'values' must be a non-empty list")
        options: list[str] = []
        for item in raw:
            if not isinstance(item, str) or not item.strip():
                raise InvalidConfigurationError("Select values must be non-empty strings")
            if item.strip() in options:
                raise InvalidConfigurationError(f"Duplicate select value '{item.strip()}'")
            options.append(item.strip())
        return tuple(options)

    def validate_value(self, attribute_name: str, value: Any) -> str:
        if not self.values:
            raise InvalidAttributeValueError(attribute_name, "no values are configured")
        if value not in self.values:
            raise InvalidAttributeValueError(
                attribute_name,
                f"{value!r} is not one of: {', '.join(self.values)}",
            )
        return value


@dataclass(frozen=True)
class ColorConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.COLOR

    values: tuple[ColorOption, ...] = ()

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        if not isinstance(raw, (list, tuple)):
            raise InvalidConfigurationError("'values' must be a list of colors")
        options: list[ColorOption] = []
        for item in raw:
            if isinstance(item, ColorOption):
                item = {"name": item.name, "hex": item.hex}
            if not isinstance(item, Mapping):
                raise InvalidConfigurationError("Each color must have a name and a hex")
            name = str(item.get("name") or "").strip()
            hex_code = str(item.get("hex") or "").strip()
            if not name:
                raise InvalidConfigurationError("Color name is required")
            if not _HEX_COLOR.match(hex_code):
                raise InvalidConfigurationError(
                    f"Color '{name}' has invalid hex '{hex_code}' (expected #RRGGBB)"
                )
            options.append(ColorOption(name=name, hex=hex_code.upper()))
        return tuple(options)

    def validate_value(self, attribute_name: str, value: Any) -> str:
        """Return the configured colour's name, or the upper-case hex when
        no colours are configured."""
        if not isinstance(value, str):
            raise InvalidAttributeValueError(attribute_name, "expected a color")
        if not self.values:
            if not _HEX_COLOR.match(value):
                raise InvalidAttributeValueError(
                    attribute_name, f"{value!r} is not a #RRGGBB color"
                )
            return value.upper()
        for option in self.values:
            if value == option.name or value.upper() == option.hex:
                return option.name
        raise InvalidAttributeValueError(
            attribute_name,
            f"{value!r} is not one of: {', '.join(o.name for o in self.values)}",
        )


@dataclass(frozen=True)
class DateConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.DATE

    def validate_value(self, attribute_name: str, value: Any) -> str:
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str):
            try:
                return date.fromisoformat(value).isoformat()
            except ValueError:
                pass
        raise InvalidAttributeValueError(attribute_name, "expected a YYYY-MM-DD date")


@dataclass(frozen=True)
class DimensionsConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.DIMENSIONS

    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    unit: str | None = None

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        if key == "unit":
            return _parse_choice(key, raw, DIMENSION_UNITS)
        return _parse_decimal(key, raw, non_negative=True)

    def validate_value(self, attribute_name: str, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            raise InvalidAttributeValueError(
                attribute_name, "expected length, width and height"
            )
        normalized: dict[str, Any] = {}
        for key in ("length", "width", "height"):
            number = _to_decimal(value.get(key))
            if number is None or number < 0:
                raise InvalidAttributeValueError(
                    attribute_name, f"'{key}' must be a non-negative number"
                )
            normalized[key] = _normalize_number(number)
        unit = value.get("unit")
        if unit is not None and unit not in DIMENSION_UNITS:
            raise InvalidAttributeValueError(attribute_name, f"unknown unit {unit!r}")
        if unit is not None:
            normalized["unit"] = unit
        return normalized


@dataclass(frozen=True)
class WeightConfiguration(AttributeConfiguration):
    attribute_type = AttributeType.WEIGHT

    unit: str | None = None
    precision: int | None = None

    @classmethod
    def _parse(cls, key: str, raw: Any) -> Any:
        if key == "unit":
            return _parse_choice(key, raw, WEIGHT_UNITS)
        return _parse_int(key, raw, minimum=0, maximum=3)

    def validate_value(self, attribute_name: str, value: Any) -> int | str:
        number = _to_decimal(value)
        if number is None or number < 0:
            raise InvalidAttributeValueError(
                attribute_name, "expected a non-negative weight"
            )
        if self.precision is not None and _decimal_places(number) > self.precision:
            raise InvalidAttributeValueError(
                attribute_name, f"at most {self.precision} decimal places allowed"
            )
        return _normalize_number(number)


CONFIGURATION_TYPES: dict[AttributeType, type[AttributeConfiguration]] = {
    AttributeType.TEXT: TextConfiguration,
    AttributeType.NUMBER: NumberConfiguration,
    AttributeType.BOOLEAN: BooleanConfiguration,
    AttributeType.SELECT: SelectConfiguration,
    AttributeType.COLOR: ColorConfiguration,
    AttributeType.DATE: DateConfiguration,
    AttributeType.DIMENSIONS: DimensionsConfiguration,
    AttributeType.WEIGHT: WeightConfiguration,
}


def configuration_for(
    attribute_type: AttributeType, mapping: Mapping[str, Any] | None = None
) -> AttributeConfiguration:
    return CONFIGURATION_TYPES[attribute_type].from_mapping(mapping)


def canonical_value(value: Any) -> str:
    """Stable text form of an attribute value, used in combination keys."""
    if isinstance(value, str):
        return json.dumps(value.strip())
    if isinstance(value, date):
        return json.dumps(value.isoformat())
    return json.dumps(value, sort_keys=True, default=str)


# ---------------------------------------------------------------------------
# Attribute aggregate
# ---------------------------------------------------------------------------


@dataclass
class Attribute(AggregateRoot):
    """A named, typed product property.

    ``name`` is the immutable system key; ``display_name`` is what the
    storefront shows.  Name uniqueness is checked by the caller through
    the repository before ``create`` is invoked.
    """

    id: str
    name: str
    display_name: str
    type: AttributeType
    filterable: bool = False
    searchable: bool = False
    is_variant: bool = False
    configuration: AttributeConfiguration | None = None
    version: int = 0

    def __post_init__(self) -> None:
        if self.configuration is None:
            self.configuration = configuration_for(self.type)
        elif self.configuration.attribute_type is not self.type:
            raise InvalidConfigurationError(
                f"{type(self.configuration).__name__} does not match "
                f"attribute type {self.type.value}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        name: str,
        display_name: str | None,
        attribute_type: AttributeType | str,
    ) -> Attribute:
        if not name or not name.strip():
            raise ValidationError("Attribute name is required", code="Attribute.NameRequired")
        display = (display_name or "").strip() or name.strip()
        return Attribute(
            id=id,
            name=name.strip(),
            display_name=display,
            type=AttributeType.parse(attribute_type),
        )

    # --- Mutations ------------------------------------------------------------

    def update(self, display_name: str) -> None:
        if not display_name or not display_name.strip():
            raise ValidationError(
                "Attribute display name is required", code="Attribute.DisplayNameRequired"
            )
        self.display_name = display_name.strip()

    def set_filterable(self, filterable: bool) -> None:
        self.filterable = bool(filterable)

    def set_searchable(self, searchable: bool) -> None:
        self.searchable = bool(searchable)

    def set_is_variant(self, is_variant: bool) -> None:
        self.is_variant = bool(is_variant)

    def update_configuration(self, key: str, value: Any) -> None:
        """Set a single configuration key; ``None`` removes the key."""
        if not key or not str(key).strip():
            raise InvalidConfigurationError("Configuration key is required")
        self.configuration = self._config.with_value(key, value)

    def replace_configuration(self, mapping: Mapping[str, Any] | None) -> None:
        """Replace the whole configuration.

        ``None`` leaves the current configuration untouched; an empty
        mapping clears every key.
        """
        if mapping is None:
            return
        self.configuration = configuration_for(self.type, mapping)

    # --- Queries --------------------------------------------------------------

    def validate_value(self, value: Any) -> Any:
        """Return *value* in its normalized form.

        Raises InvalidAttributeValueError if it does not fit this attribute.
        """
        if value is None:
            raise InvalidAttributeValueError(self.name, "a value is required")
        return self._config.validate_value(self.name, value)

    @property
    def configuration_map(self) -> dict[str, Any]:
        return self._config.to_mapping()

    def snapshot(self) -> dict[str, object]:
        values = super().snapshot()
        values["configuration"] = self.configuration_map
        return values

    @property
    def _config(self) -> AttributeConfiguration:
        if self.configuration is None:
            self.configuration = configuration_for(self.type)
        return self.configuration
