"""
Result formatting.

Output must match what the browser prints for the same number, so the rules
mirror JavaScript's Number.prototype.toExponential(6) and
Number(x.toFixed(6)).toString():

    0.00000012345   -> "1.234500e-7"
    1000.0          -> "1000"
    2.20462262185   -> "2.204623"
"""

import math
from decimal import Decimal

PLACEHOLDER = "0"
_TINY = 1e-6


def _js_exponential(value: float, digits: int = 6) -> str:
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def _js_number(value: float) -> str:
    """Shortest round-trip repr, without exponent below 1e21 (JS rules)."""
    if value == 0:
        return "0"
    if abs(value) >= 1e21:
        return repr(value)
    return format(Decimal(repr(value)).normalize(), "f")


def format_result(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value != 0 and abs(value) < _TINY:
        return _js_exponential(value)
    return _js_number(float(f"{value:.6f}"))


def format_failure() -> str:
    """What the UI shows when a conversion has no result."""
    return PLACEHOLDER
