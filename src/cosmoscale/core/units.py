"""Unit tables for Cosmoscale.

Two ordered tables cover the whole journey: metric units from picometers
to billions of kilometers (thresholds in meters) and light-year units up
to trillions of light years (thresholds in light years). Each table's
first entry doubles as the fallback for values below every threshold.
"""

from dataclasses import dataclass


# Meters per light year
LIGHT_YEAR_M = 9.4607304725808e15

# Sizes above this many meters are reported in light years
LIGHT_YEAR_THRESHOLD_M = 1e16


@dataclass(frozen=True)
class UnitEntry:
    """A unit and the smallest magnitude it is used for."""

    threshold: float
    singular: str
    plural: str


class UnitTable:
    """Immutable, ascending list of units with a smallest-unit fallback."""

    def __init__(self, name: str, entries: list[UnitEntry]):
        if not entries:
            raise ValueError(f"Unit table '{name}' is empty")
        for lower, upper in zip(entries, entries[1:]):
            if not upper.threshold > lower.threshold:
                raise ValueError(
                    f"Unit table '{name}' is not strictly increasing at "
                    f"'{lower.singular}' -> '{upper.singular}'"
                )
        self._name = name
        self._entries = tuple(entries)

    @property
    def fallback(self) -> UnitEntry:
        """Unit used when a value is below every threshold."""
        return self._entries[0]

    def select(self, value: float) -> UnitEntry:
        """Return the largest unit whose threshold does not exceed abs(value).

        Values below the first threshold, and NaN, get the fallback unit.
        """
        magnitude = abs(value)
        for entry in reversed(self._entries):
            if magnitude >= entry.threshold:
                return entry
        return self.fallback

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __repr__(self):
        return f"UnitTable({self._name!r}, {len(self._entries)} units)"


METRIC_UNITS = UnitTable(
    "metric",
    [
        UnitEntry(1e-12, "picometer", "picometers"),
        UnitEntry(1e-9, "nanometer", "nanometers"),
        UnitEntry(1e-6, "micrometer", "micrometers"),
        UnitEntry(1e-3, "millimeter", "millimeters"),
        UnitEntry(1e-2, "centimeter", "centimeters"),
        UnitEntry(1.0, "meter", "meters"),
        UnitEntry(1e3, "kilometer", "kilometers"),
        UnitEntry(1e9, "million kilometers", "million kilometers"),
        UnitEntry(1e12, "billion kilometers", "billion kilometers"),
    ],
)

LIGHT_YEAR_UNITS = UnitTable(
    "light_year",
    [
        UnitEntry(1.0, "light year", "light years"),
        UnitEntry(1e3, "thousand light years", "thousand light years"),
        UnitEntry(1e6, "million light years", "million light years"),
        UnitEntry(1e9, "billion light years", "billion light years"),
        UnitEntry(1e12, "trillion light years", "trillion light years"),
    ],
)
