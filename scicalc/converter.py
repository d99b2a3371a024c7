"""Unit conversion for length, weight and temperature.

Length and weight are linear: each unit has a rate against a base unit
(metre, kilogram).  Temperature is affine and goes through Celsius.
"""

from __future__ import annotations

from enum import Enum


class ConversionError(ValueError):
    """Unknown unit, or units from different categories."""


class UnitCategory(str, Enum):
    """Physical quantity a unit measures."""

    LENGTH = "length"
    WEIGHT = "weight"
    TEMPERATURE = "temperature"


# Display order per category; the first two are the default from/to pair.
_UNITS: dict[UnitCategory, tuple[str, ...]] = {
    UnitCategory.LENGTH: ("m", "km", "cm", "mm", "in", "ft", "yd", "mi"),
    UnitCategory.WEIGHT: ("kg", "g", "mg", "lb", "oz"),
    UnitCategory.TEMPERATURE: ("C", "F", "K"),
}

_LABELS: dict[str, str] = {
    "m": "Meters", "km": "Kilometers", "cm": "Centimeters", "mm": "Millimeters",
    "in": "Inches", "ft": "Feet", "yd": "Yards", "mi": "Miles",
    "kg": "Kilograms", "g": "Grams", "mg": "Milligrams", "lb": "Pounds", "oz": "Ounces",
    "C": "Celsius", "F": "Fahrenheit", "K": "Kelvin",
}

# Rate per unit against the category base (metre, kilogram).
_RATES: dict[str, float] = {
    # Length (base: meter)
    "m": 1.0,
    "cm": 0.01,
    "mm": 0.001,
    "km": 1000.0,
    "in": 0.0254,
    "ft": 0.3048,
    "yd": 0.9144,
    "mi": 1609.34,
    # Weight (base: kg)
    "kg": 1.0,
    "g": 0.001,
    "mg": 0.000001,
    "lb": 0.453592,
    "oz": 0.0283495,
}

_KELVIN_OFFSET = 273.15

# Max fractional digits shown for a converted value.
DISPLAY_DIGITS = 6


def category_of(unit: str) -> UnitCategory:
    """Find the category a unit belongs to.

    Raises:
        ConversionError: the unit is unknown.
    """
    for category, units in _UNITS.items():
        if unit in units:
            return category
    raise ConversionError(f"Unknown unit: {unit}")


def units_in(category: UnitCategory) -> list[str]:
    return list(_UNITS[category])


def unit_label(unit: str) -> str:
    return _LABELS.get(unit, unit)


def _to_celsius(value: float, unit: str) -> float:
    if unit == "F":
        return (value - 32) * 5 / 9
    if unit == "K":
        return value - _KELVIN_OFFSET
    return value


def _from_celsius(value: float, unit: str) -> float:
    if unit == "F":
        return value * 9 / 5 + 32
    if unit == "K":
        return value + _KELVIN_OFFSET
    return value


def convert(amount: float, from_unit: str, to_unit: str) -> float:
    """Convert an amount between two units of the same category.

    Args:
        amount: Value expressed in from_unit.
        from_unit: Source unit symbol (e.g. "m", "lb", "C").
        to_unit: Target unit symbol.

    Returns:
        The amount expressed in to_unit.

    Raises:
        ConversionError: unknown unit or mismatched categories.
    """
    source = category_of(from_unit)
    target = category_of(to_unit)
    if source != target:
        raise ConversionError(
            f"Cannot convert {source.value} ({from_unit}) to {target.value} ({to_unit})"
        )
    if from_unit == to_unit:
        return amount
    if source == UnitCategory.TEMPERATURE:
        return _from_celsius(_to_celsius(amount, from_unit), to_unit)
    return amount * _RATES[from_unit] / _RATES[to_unit]


def format_conversion(value: float) -> str:
    """Round to DISPLAY_DIGITS fractional digits, dropping trailing zeros."""
    text = f"{value:.{DISPLAY_DIGITS}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text
