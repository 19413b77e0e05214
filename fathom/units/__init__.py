"""
Unit conversion core: registry, Beaufort scale, converter, formatting.
Pure functions over static tables; nothing here touches storage or config.
"""
from fathom.units.beaufort import (
    BEAUFORT_SCALE,
    BeaufortEntry,
    clamp_level,
    entry_for_level,
    level_for_knots,
)
from fathom.units.converter import (
    INVALID_INPUT,
    UNKNOWN_UNIT,
    ConversionFailure,
    convert,
    parse_value,
    wind_force,
)
from fathom.units.formatting import format_failure, format_result
from fathom.units.registry import (
    CATEGORIES,
    BeaufortUnit,
    Category,
    LinearUnit,
    TemperatureUnit,
    UnknownCategoryError,
    default_pair,
    find_unit,
    units_for,
)

__all__ = [
    "BEAUFORT_SCALE",
    "BeaufortEntry",
    "clamp_level",
    "entry_for_level",
    "level_for_knots",
    "INVALID_INPUT",
    "UNKNOWN_UNIT",
    "ConversionFailure",
    "convert",
    "parse_value",
    "wind_force",
    "format_failure",
    "format_result",
    "CATEGORIES",
    "BeaufortUnit",
    "Category",
    "LinearUnit",
    "TemperatureUnit",
    "UnknownCategoryError",
    "default_pair",
    "find_unit",
    "units_for",
]
