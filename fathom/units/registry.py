"""
Unit registry: the static table of categories and their units.

Units come in three shapes:
  LinearUnit       -- a factor relative to the category's base unit
  TemperatureUnit  -- Celsius, Fahrenheit or Kelvin (fixed affine formulas)
  BeaufortUnit     -- the discrete wind-force scale, wind category only

Unit order within a category matters: the first two units are the default
from/to pair and the UI lists them in this order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class UnknownCategoryError(ValueError):
    """Raised for a category outside the closed enumeration."""


class Category(str, enum.Enum):
    LENGTH = "length"
    WEIGHT = "weight"
    SPEED = "speed"
    PRESSURE = "pressure"
    TEMPERATURE = "temperature"
    WIND = "wind"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownCategoryError(f"Unknown category: {value!r}") from None


@dataclass(frozen=True)
class LinearUnit:
    code: str
    label: str
    factor: float     # one of this unit, expressed in the base unit


class TemperatureUnit(enum.Enum):
    """The three temperature scales. value = (code, label, offset)."""
    CELSIUS = ("C", "Celsius (°C)", 0.0)
    FAHRENHEIT = ("F", "Fahrenheit (°F)", 32.0)
    KELVIN = ("K", "Kelvin (K)", 273.15)

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def offset(self) -> float:
        return self.value[2]


@dataclass(frozen=True)
class BeaufortUnit:
    code: str = "bf"
    label: str = "Beaufort Scale"


Unit = LinearUnit | TemperatureUnit | BeaufortUnit


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for a category tab."""
    category: Category
    label: str
    note: str


_KNOT = LinearUnit("kt", "Knots (kt)", 1.852)
_MPS = LinearUnit("ms", "m/s", 3.6)
_KMH = LinearUnit("kmh", "km/h", 1)
_MPH = LinearUnit("mph", "mph", 1.60934)

UNITS: dict[Category, tuple[Unit, ...]] = {
    Category.LENGTH: (
        LinearUnit("nmi", "Nautical Miles (nmi)", 1852),
        LinearUnit("ftm", "Fathoms (ftm)", 1.8288),
        LinearUnit("m", "Meters (m)", 1),
        LinearUnit("km", "Kilometers (km)", 1000),
        LinearUnit("ft", "Feet (ft)", 0.3048),
        LinearUnit("yd", "Yards (yd)", 0.9144),
        LinearUnit("mi", "Miles (mi)", 1609.344),
    ),
    # base: km/h
    Category.SPEED: (_KNOT, _MPS, _KMH, _MPH),
    Category.WIND: (BeaufortUnit(), _KNOT, _MPS, _KMH, _MPH),
    # hPa and mb are the same unit; hPa is the base
    Category.PRESSURE: (
        LinearUnit("hpa", "Hectopascals (hPa)", 1),
        LinearUnit("mb", "Millibars (mb)", 1),
        LinearUnit("inhg", "Inches of Mercury (inHg)", 33.8639),
        LinearUnit("mmhg", "Millimeters of Mercury (mmHg)", 1.33322),
        LinearUnit("psi", "PSI", 68.9476),
    ),
    Category.WEIGHT: (
        LinearUnit("t", "Metric Tons (t)", 1000),
        LinearUnit("kg", "Kilograms (kg)", 1),
        LinearUnit("g", "Grams (g)", 0.001),
        LinearUnit("lb", "Pounds (lb)", 0.453592),
    ),
    Category.TEMPERATURE: tuple(TemperatureUnit),
}

# Tab order in the UI
CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo(Category.LENGTH, "Distance",
                 "Converting between 7 different length units for maritime navigation."),
    CategoryInfo(Category.SPEED, "Speed",
                 "1 Knot is exactly 1.852 km/h (one nautical mile per hour)."),
    CategoryInfo(Category.WIND, "Wind",
                 "The Beaufort scale is an empirical measure that relates wind speed "
                 "to observed conditions at sea or on land."),
    CategoryInfo(Category.PRESSURE, "Pressure",
                 "Atmospheric pressure is critical for weather forecasting. "
                 "Standard sea-level pressure is 1013.25 hPa."),
    CategoryInfo(Category.TEMPERATURE, "Weather",
                 "Converting between 3 different temperature units for maritime navigation."),
    CategoryInfo(Category.WEIGHT, "Weight",
                 "Converting between 4 different weight units for maritime navigation."),
)


def units_for(category: Category | str) -> tuple[Unit, ...]:
    """Ordered units of a category. Raises UnknownCategoryError."""
    return UNITS[Category.parse(category)]


def find_unit(category: Category | str, code: str) -> Unit | None:
    """Exact, case-sensitive lookup by unit code."""
    for unit in units_for(category):
        if unit.code == code:
            return unit
    return None


def default_pair(category: Category | str) -> tuple[Unit, Unit]:
    """The UI's initial (from, to) selection for a category."""
    units = units_for(category)
    return units[0], units[1] if len(units) > 1 else units[0]


def unit_to_dict(unit: Unit) -> dict:
    data = {"value": unit.code, "label": unit.label}
    if isinstance(unit, LinearUnit):
        data["factor"] = unit.factor
    elif isinstance(unit, TemperatureUnit):
        data["offset"] = unit.offset
    return data


def catalog() -> list[dict]:
    """Everything the UI needs to render the category tabs and unit selects."""
    out = []
    for info in CATEGORIES:
        units = units_for(info.category)
        from_unit, to_unit = default_pair(info.category)
        out.append({
            "id": info.category.value,
            "label": info.label,
            "note": info.note,
            "units": [unit_to_dict(u) for u in units],
            "defaultFrom": from_unit.code,
            "defaultTo": to_unit.code,
        })
    return out
