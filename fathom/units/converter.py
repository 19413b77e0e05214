"""
Converter: turn a magnitude in one unit into another unit of the same category.

convert() never raises for bad user input. A non-numeric value or an unknown
unit code comes back as a ConversionFailure; only a category outside the
registry raises (UnknownCategoryError), since the UI can't produce one.

Strategies:
  linear       value * from.factor / to.factor   (via the base unit)
  temperature  to Celsius, then from Celsius
  wind         via km/h; the Beaufort side uses the scale's knot thresholds
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from fathom.units.beaufort import (
    BeaufortEntry,
    clamp_level,
    entry_for_level,
    kmh_to_knots,
    knots_to_kmh,
    level_for_knots,
)
from fathom.units.registry import (
    BeaufortUnit,
    Category,
    LinearUnit,
    TemperatureUnit,
    Unit,
    find_unit,
)

logger = logging.getLogger(__name__)

INVALID_INPUT = "invalid_input"
UNKNOWN_UNIT = "unknown_unit"


@dataclass(frozen=True)
class ConversionFailure:
    """Why a conversion produced no result."""
    reason: str       # INVALID_INPUT or UNKNOWN_UNIT
    detail: str = ""

    def __bool__(self) -> bool:
        return False


def parse_value(raw) -> float | None:
    """Parse a user-entered magnitude. None for anything that isn't a finite real."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


# --- temperature ----------------------------------------------------------

def _to_celsius(unit: TemperatureUnit, value: float) -> float:
    if unit is TemperatureUnit.CELSIUS:
        return value
    if unit is TemperatureUnit.FAHRENHEIT:
        return (value - 32) * (5 / 9)
    return value - 273.15


def _from_celsius(unit: TemperatureUnit, celsius: float) -> float:
    if unit is TemperatureUnit.CELSIUS:
        return celsius
    if unit is TemperatureUnit.FAHRENHEIT:
        return celsius * (9 / 5) + 32
    return celsius + 273.15


# --- wind -----------------------------------------------------------------

def _wind_to_kmh(unit: LinearUnit | BeaufortUnit, value: float) -> float:
    if isinstance(unit, BeaufortUnit):
        return knots_to_kmh(entry_for_level(clamp_level(value)).min_kt)
    return value * unit.factor


def _level_for_kmh(kmh: float) -> int:
    # rounding absorbs the km/h round-trip error right at a threshold (11 kt -> 10.999...)
    return level_for_knots(round(kmh_to_knots(kmh), 9))


def _wind_from_kmh(unit: LinearUnit | BeaufortUnit, kmh: float) -> float:
    if isinstance(unit, BeaufortUnit):
        return float(_level_for_kmh(kmh))
    return kmh / unit.factor


# --- dispatch -------------------------------------------------------------

def _convert_units(category: Category, src: Unit, dst: Unit, value: float) -> float | ConversionFailure:
    """Same-unit conversions return value unchanged, except bf->bf which yields the clamped level."""
    if category is Category.TEMPERATURE:
        if not (isinstance(src, TemperatureUnit) and isinstance(dst, TemperatureUnit)):
            return ConversionFailure(UNKNOWN_UNIT, "temperature needs C, F or K")
        if src is dst:
            return value
        return _from_celsius(dst, _to_celsius(src, value))

    if category is Category.WIND:
        if src == dst and isinstance(src, LinearUnit):
            return value
        return _wind_from_kmh(dst, _wind_to_kmh(src, value))

    if not (isinstance(src, LinearUnit) and isinstance(dst, LinearUnit)):
        return ConversionFailure(UNKNOWN_UNIT, f"{category.value} units must be linear")
    if src == dst:
        return value
    base = value * src.factor
    return base / dst.factor


def convert(category: Category | str, from_unit: str, to_unit: str, input_value) -> float | ConversionFailure:
    """
    Convert input_value from from_unit to to_unit within category.

    input_value may be a number or the raw string typed by the user.
    Returns the converted float, or a ConversionFailure (falsy).
    Raises UnknownCategoryError for an unregistered category.
    """
    category = Category.parse(category)

    value = parse_value(input_value)
    if value is None:
        return ConversionFailure(INVALID_INPUT, f"not a number: {input_value!r}")

    src = find_unit(category, from_unit)
    if src is None:
        return ConversionFailure(UNKNOWN_UNIT, f"{category.value} has no unit {from_unit!r}")
    dst = find_unit(category, to_unit)
    if dst is None:
        return ConversionFailure(UNKNOWN_UNIT, f"{category.value} has no unit {to_unit!r}")

    result = _convert_units(category, src, dst, value)
    if not isinstance(result, ConversionFailure):
        logger.debug("convert %s: %s %s -> %s %s", category.value, value, from_unit, result, to_unit)
    return result


def wind_force(from_unit: str, input_value) -> BeaufortEntry | None:
    """
    Beaufort entry for the wind speed being converted.

    Beaufort input is clamped to its level; any other wind unit is mapped
    through level_for_knots. None when the input or unit is unusable.
    """
    value = parse_value(input_value)
    unit = find_unit(Category.WIND, from_unit)
    if value is None or unit is None:
        return None
    if isinstance(unit, BeaufortUnit):
        return entry_for_level(clamp_level(value))
    return entry_for_level(_level_for_kmh(_wind_to_kmh(unit, value)))
