"""Tests for unit tables and distance formatting."""

import math

import pytest

from cosmoscale.core.formatter import (
    decimal_places_for,
    format_distance,
    format_light_years,
    format_meters,
    render_number,
    round_magnitude,
)
from cosmoscale.core.units import (
    LIGHT_YEAR_M,
    LIGHT_YEAR_UNITS,
    METRIC_UNITS,
    UnitEntry,
    UnitTable,
)


class TestUnitTable:
    def test_tables_strictly_increasing(self):
        for table in (METRIC_UNITS, LIGHT_YEAR_UNITS):
            thresholds = [u.threshold for u in table]
            assert all(a < b for a, b in zip(thresholds, thresholds[1:]))

    def test_select_largest_threshold_not_exceeding(self):
        assert METRIC_UNITS.select(0.019).singular == "centimeter"
        assert METRIC_UNITS.select(1e3).singular == "kilometer"
        assert METRIC_UNITS.select(999.0).singular == "meter"
        assert METRIC_UNITS.select(5e15).singular == "billion kilometers"

    def test_select_uses_absolute_value(self):
        assert METRIC_UNITS.select(-0.019).singular == "centimeter"

    def test_below_all_thresholds_falls_back_to_first(self):
        assert METRIC_UNITS.select(1e-15) is METRIC_UNITS.fallback
        assert METRIC_UNITS.select(0.0).singular == "picometer"
        assert LIGHT_YEAR_UNITS.select(0.5).singular == "light year"

    def test_nan_falls_back_to_first(self):
        assert METRIC_UNITS.select(float("nan")) is METRIC_UNITS.fallback

    def test_rejects_unordered_entries(self):
        with pytest.raises(ValueError):
            UnitTable("bad", [UnitEntry(1.0, "a", "as"), UnitEntry(1.0, "b", "bs")])

    def test_rejects_empty_table(self):
        with pytest.raises(ValueError):
            UnitTable("empty", [])


class TestRounding:
    def test_regular_magnitudes_use_two_places(self):
        assert decimal_places_for(1.234) == 2
        assert decimal_places_for(1e-3) == 2

    def test_tiny_magnitudes_keep_significant_digits(self):
        # 5e-04: exponent -4, no fraction digits
        assert decimal_places_for(0.0005) == 9
        # 1.5e-05: exponent -5, one fraction digit
        assert decimal_places_for(1.5e-5) == 11

    def test_tiny_values_never_round_to_zero(self):
        assert render_number(round_magnitude(0.0005)) == "0.0005"
        assert render_number(round_magnitude(1.5e-5)) == "0.000015"
        assert render_number(round_magnitude(2.34e-7)) == "0.000000234"

    def test_half_up_rounding(self):
        assert round_magnitude(1.125) == 1.13

    def test_rounded_value_is_nearest_double(self):
        rounded = round_magnitude(1.23456e-5)
        assert isinstance(rounded, float)
        assert rounded == 1.23456e-5

    def test_nonfinite_passes_through(self):
        assert math.isnan(round_magnitude(math.nan))
        assert round_magnitude(math.inf) == math.inf

    def test_grouping_and_trailing_zeros(self):
        assert render_number(123456.7) == "123,456.7"
        assert render_number(1000.0) == "1,000"
        assert render_number(2.0) == "2"
        assert render_number(-1234.5) == "-1,234.5"


class TestFormatMeters:
    @pytest.mark.parametrize(
        "meters, expected",
        [
            (1.9e-2, "1.9 centimeters"),
            (1.0, "1 meter"),
            (1.5, "1.5 meters"),
            (2.0, "2 meters"),
            (2e-9, "2 nanometers"),
            (1.27e7, "12,700 kilometers"),
            (1.39e9, "1.39 million kilometers"),
            (123456789.0, "123,456.79 kilometers"),
            (1.125, "1.13 meters"),
        ],
    )
    def test_examples(self, meters, expected):
        assert format_meters(meters) == expected

    def test_singular_only_for_exactly_one_after_rounding(self):
        assert format_meters(1.004) == "1 meter"
        assert format_meters(-1.0) == "-1 meter"
        assert format_meters(1.006) == "1.01 meters"

    def test_zero_is_plural(self):
        assert format_meters(0.0) == "0 picometers"

    def test_below_smallest_unit_keeps_digits(self):
        text = format_meters(5e-16)
        number, unit = text.split(" ", 1)
        assert unit == "picometers"
        assert float(number) > 0
        assert not text.startswith("0.00 ")

    def test_tiny_inexact_quotient_uses_shortest_digits(self):
        # the quotient is not the double nearest 1.23456e-05
        assert format_meters(1.23456e-17) == "0.000012345600000000001 picometers"

    def test_huge_value_keeps_shortest_digits(self):
        number, unit = format_meters(1e300).split(" ", 1)
        digits = number.replace(",", "")
        assert unit == "billion kilometers"
        assert len(digits) in (288, 289)
        assert len(digits.rstrip("0")) <= 17

    def test_nan_does_not_raise(self):
        assert format_meters(float("nan")) == "nan picometers"


class TestFormatDistance:
    def test_threshold_itself_stays_metric(self):
        assert format_distance(1e16) == "10,000 billion kilometers"

    def test_above_threshold_switches_to_light_years(self):
        assert format_distance(1.892e16) == "2 light years"
        assert format_distance(9.46073e20) == "100 thousand light years"
        assert format_distance(8.79848e26) == "93 billion light years"

    def test_conversion_factor(self):
        assert format_distance(3 * LIGHT_YEAR_M) == "3 light years"

    def test_custom_threshold(self):
        assert format_distance(2 * LIGHT_YEAR_M, light_year_threshold=1e20) == format_meters(2 * LIGHT_YEAR_M)

    def test_light_year_names(self):
        assert format_light_years(1.0) == "1 light year"
        assert format_light_years(2.5e3) == "2.5 thousand light years"
        assert format_light_years(4e12) == "4 trillion light years"

    def test_every_output_is_number_then_unit(self):
        for exponent in range(-12, 28):
            text = format_distance(math.pow(10, exponent) * 3.7)
            number, unit = text.split(" ", 1)
            float(number.replace(",", ""))
            assert unit
