"""
Tests for the converter.
Covers the three strategies (linear, temperature, wind/Beaufort), the failure
values returned for bad input, and the algebraic properties of linear units.
"""

import itertools

import pytest

from fathom.units.converter import (
    INVALID_INPUT,
    UNKNOWN_UNIT,
    ConversionFailure,
    convert,
    parse_value,
    wind_force,
)
from fathom.units.registry import Category, UnknownCategoryError, units_for

LINEAR = ["length", "weight", "speed", "pressure"]


def _pairs(category):
    codes = [u.code for u in units_for(category)]
    return [(category, a, b) for a, b in itertools.product(codes, repeat=2)]


def _triples(category):
    codes = [u.code for u in units_for(category)]
    return [(category, a, b, c) for a, b, c in itertools.product(codes, repeat=3)]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_km_to_m():
    assert convert("length", "km", "m", 1) == 1000


def test_kg_to_lb():
    assert convert("weight", "kg", "lb", 1) == pytest.approx(2.204623, rel=1e-6)


def test_knots_to_kmh():
    assert convert("speed", "kt", "kmh", 10) == pytest.approx(18.52)


def test_hpa_to_inhg():
    assert convert("pressure", "hpa", "inhg", 1013.25) == pytest.approx(29.9213, abs=1e-4)


def test_nautical_mile_in_fathoms():
    assert convert(Category.LENGTH, "nmi", "ftm", 1) == pytest.approx(1012.6859, abs=1e-4)


def test_string_input_is_parsed():
    assert convert("length", "km", "m", " 2.5 ") == 2500


# ---------------------------------------------------------------------------
# Linear properties
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("category,a,b", [p for c in LINEAR for p in _pairs(c)])
def test_round_trip(category, a, b):
    v = 123.456
    there = convert(category, b, a, v)
    assert convert(category, a, b, there) == pytest.approx(v, rel=1e-9)


@pytest.mark.parametrize("category,a,b,c", [t for cat in ("length", "weight", "speed", "pressure") for t in _triples(cat)])
def test_composition(category, a, b, c):
    v = 42.0
    direct = convert(category, a, c, v)
    via_b = convert(category, b, c, convert(category, a, b, v))
    assert via_b == pytest.approx(direct, rel=1e-9)


@pytest.mark.parametrize("category", ["length", "weight", "speed", "pressure", "temperature"])
def test_identity_is_exact(category):
    for unit in units_for(category):
        for v in (0.1, 1.8288, -40.0, 1e9):
            assert convert(category, unit.code, unit.code, v) == v


def test_wind_identity_for_linear_units():
    for code in ("kt", "ms", "kmh", "mph"):
        assert convert("wind", code, code, 0.3) == 0.3


def test_mb_and_hpa_are_equal():
    assert convert("pressure", "mb", "hpa", 1013.25) == 1013.25


# ---------------------------------------------------------------------------
# Temperature
# ---------------------------------------------------------------------------

def test_temperature_fixed_points():
    assert convert("temperature", "C", "F", 0) == 32
    assert convert("temperature", "C", "K", 0) == 273.15
    assert convert("temperature", "F", "C", 32) == 0


@pytest.mark.parametrize("src,dst,value,expected", [
    ("C", "F", 100, 212),
    ("F", "C", 212, 100),
    ("K", "C", 0, -273.15),
    ("F", "K", 32, 273.15),
    ("K", "F", 273.15, 32),
    ("C", "F", -40, -40),
])
def test_temperature_formulas(src, dst, value, expected):
    assert convert("temperature", src, dst, value) == pytest.approx(expected)


def test_temperature_unknown_code():
    result = convert("temperature", "C", "R", 10)
    assert isinstance(result, ConversionFailure)
    assert result.reason == UNKNOWN_UNIT


# ---------------------------------------------------------------------------
# Wind / Beaufort
# ---------------------------------------------------------------------------

def test_beaufort_zero_is_calm():
    assert convert("wind", "bf", "kmh", 0) == 0


def test_beaufort_to_knots_gives_threshold():
    assert convert("wind", "bf", "kt", 4) == pytest.approx(11)
    assert convert("wind", "bf", "kmh", 4) == pytest.approx(11 * 1.852)


def test_knots_to_beaufort_at_threshold():
    assert convert("wind", "kt", "bf", 11) == 4


@pytest.mark.parametrize("level", range(13))
def test_beaufort_threshold_round_trip(level):
    """Every level's own threshold maps back to that level through any linear unit."""
    for code in ("kt", "ms", "kmh", "mph"):
        speed = convert("wind", "bf", code, level)
        assert convert("wind", code, "bf", speed) == level


def test_beaufort_input_is_clamped_and_floored():
    assert convert("wind", "bf", "kt", 15) == pytest.approx(64)
    assert convert("wind", "bf", "kt", -3) == 0
    assert convert("wind", "bf", "kt", 4.9) == pytest.approx(11)


def test_beaufort_to_beaufort_clamps():
    assert convert("wind", "bf", "bf", 7) == 7
    assert convert("wind", "bf", "bf", 20) == 12


def test_low_wind_floors_at_zero():
    assert convert("wind", "kmh", "bf", 0.5) == 0


def test_high_wind_caps_at_twelve():
    assert convert("wind", "mph", "bf", 500) == 12


def test_wind_linear_via_kmh():
    assert convert("wind", "ms", "kmh", 10) == pytest.approx(36)
    assert convert("wind", "kmh", "ms", 36) == pytest.approx(10)


def test_wind_unknown_unit():
    result = convert("wind", "furlong", "bf", 3)
    assert isinstance(result, ConversionFailure)
    assert result.reason == UNKNOWN_UNIT


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["abc", "", "   ", None, "nan", "inf", float("nan"), True, [1]])
def test_invalid_input_is_a_failure_not_an_exception(raw):
    result = convert("length", "m", "km", raw)
    assert isinstance(result, ConversionFailure)
    assert result.reason == INVALID_INPUT
    assert not result


def test_unknown_unit_is_a_failure():
    result = convert("length", "m", "parsec", 1)
    assert isinstance(result, ConversionFailure)
    assert result.reason == UNKNOWN_UNIT
    assert "parsec" in result.detail


def test_unit_from_other_category_is_unknown():
    result = convert("length", "kg", "m", 1)
    assert isinstance(result, ConversionFailure)
    assert result.reason == UNKNOWN_UNIT


def test_invalid_input_checked_before_units():
    result = convert("length", "nope", "m", "abc")
    assert result.reason == INVALID_INPUT


def test_unknown_category_raises():
    with pytest.raises(UnknownCategoryError):
        convert("volume", "l", "gal", 1)


# ---------------------------------------------------------------------------
# parse_value / wind_force
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw,expected", [
    ("1", 1.0), ("-2.5", -2.5), ("1e3", 1000.0), (7, 7.0), (0.25, 0.25), (" 3 ", 3.0),
])
def test_parse_value(raw, expected):
    assert parse_value(raw) == expected


@pytest.mark.parametrize("raw", ["12abc", "-inf", "Infinity", "", {}, False])
def test_parse_value_rejects(raw):
    assert parse_value(raw) is None


def test_wind_force_from_beaufort_input():
    assert wind_force("bf", 4.7).level == 4
    assert wind_force("bf", 99).level == 12
    assert wind_force("bf", -1).description == "Calm"


def test_wind_force_from_speed_input():
    assert wind_force("kt", 11).level == 4
    assert wind_force("kmh", 100).level == 10
    assert wind_force("ms", 0).level == 0


def test_wind_force_agrees_with_conversion_to_beaufort():
    for code, value in (("kt", 27.9), ("mph", 45), ("ms", 12), ("kmh", 3)):
        assert wind_force(code, value).level == convert("wind", code, "bf", value)


def test_wind_force_unusable_input():
    assert wind_force("kt", "abc") is None
    assert wind_force("knots", 3) is None
