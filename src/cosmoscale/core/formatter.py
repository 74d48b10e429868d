"""Human-readable distance strings.

Picks the best-fitting unit for a size, scales the value into that unit
and renders it as "<number> <unit name>", e.g. "1.9 centimeters" or
"100 thousand light years".

Magnitudes of at least 1e-3 are rounded to two decimal places. Smaller
magnitudes keep every significant digit of their shortest scientific
representation plus five more places, so values below the smallest unit
never collapse to "0".
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP

import numpy as np

from cosmoscale.core.units import (
    LIGHT_YEAR_M,
    LIGHT_YEAR_THRESHOLD_M,
    LIGHT_YEAR_UNITS,
    METRIC_UNITS,
    UnitEntry,
    UnitTable,
)


TINY_MAGNITUDE = 1e-3
_DEFAULT_PLACES = 2
_EXTRA_TINY_PLACES = 5

# Wide enough for the exact expansion of any double
_CONTEXT = Context(prec=1100, rounding=ROUND_HALF_UP)


def decimal_places_for(magnitude: float) -> int:
    """Number of decimal places a magnitude is rounded to."""
    if abs(magnitude) >= TINY_MAGNITUDE:
        return _DEFAULT_PLACES
    mantissa, exponent = np.format_float_scientific(magnitude, unique=True, trim="-").split("e")
    fraction_digits = len(mantissa.partition(".")[2])
    return max(0, -int(exponent) + fraction_digits) + _EXTRA_TINY_PLACES


def round_magnitude(magnitude: float) -> float:
    """Round half-up on the exact binary value, back to the nearest double."""
    if not math.isfinite(magnitude):
        return magnitude
    quantum = Decimal(1).scaleb(-decimal_places_for(magnitude))
    return float(Decimal(magnitude).quantize(quantum, context=_CONTEXT))


def render_number(value: float) -> str:
    """Shortest digit-grouped rendering of a double, without exponent."""
    if not math.isfinite(value):
        return str(value)
    text = np.format_float_positional(value, unique=True, trim="-")
    sign, digits = ("-", text[1:]) if text.startswith("-") else ("", text)
    whole, point, fraction = digits.partition(".")
    return f"{sign}{int(whole):,}{point}{fraction}"


def unit_name(unit: UnitEntry, rounded: float) -> str:
    """Singular only for a rounded magnitude of exactly one."""
    if rounded == 1 or rounded == -1:
        return unit.singular
    return unit.plural


def format_in(table: UnitTable, value: float) -> str:
    """Format `value` (in the table's base unit) with the best unit of `table`."""
    unit = table.select(value)
    rounded = round_magnitude(value / unit.threshold)
    return f"{render_number(rounded)} {unit_name(unit, rounded)}"


def format_meters(meters: float) -> str:
    return format_in(METRIC_UNITS, meters)


def format_light_years(light_years: float) -> str:
    return format_in(LIGHT_YEAR_UNITS, light_years)


def format_distance(size_m: float, light_year_threshold: float = LIGHT_YEAR_THRESHOLD_M) -> str:
    """Format a size in meters, switching to light years above the threshold."""
    if size_m <= light_year_threshold:
        return format_meters(size_m)
    return format_light_years(size_m / LIGHT_YEAR_M)
