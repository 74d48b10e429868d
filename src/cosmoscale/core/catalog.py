"""The catalog of reference objects shown along the journey.

Raw entries (name, physical size, HSL color, luminosity, optional texture)
are sorted ascending by size once and turned into immutable `LabelEntry`
records. Each record carries a display size/scale pair that keeps text
geometry above a minimum size, plus its formatted distance label.

Catalog order matters downstream: objects are placed front to back in
this order and label offsets alternate by index parity.
"""

import json
import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger
from PySide6.QtGui import QColor

from cosmoscale.core.formatter import format_distance
from cosmoscale.core.units import LIGHT_YEAR_THRESHOLD_M


# Smallest size text geometry is built at; smaller objects are scaled down
MIN_TEXT_SIZE = 0.01

# Smallest positive double; display scales never reach exact zero
MIN_DISPLAY_SCALE = math.ulp(0.0)

# Label placement relative to object size, by index parity
LABEL_OFFSET_EVEN = 0.15
LABEL_OFFSET_ODD = -2.0

RGB = tuple[float, float, float]


@dataclass(frozen=True)
class RawEntry:
    """A reference object as authored: size in meters, color in HSL."""

    name: str
    size_m: float
    hsl: tuple[float, float, float]
    luminosity: float = 0.0
    texture: str | None = None


@dataclass(frozen=True)
class LabelEntry:
    """A catalog object ready for scene construction."""

    name: str
    actual_size_m: float
    display_size: float
    display_scale: float
    color: RGB
    luminosity: float
    distance_label: str
    texture_id: str | None = None

    @property
    def glows(self) -> bool:
        return self.luminosity > 0

    @property
    def display_color(self) -> RGB:
        """Color as drawn: luminous objects are tinted by their luminosity."""
        if not self.glows:
            return self.color
        r, g, b = self.color
        return (r * self.luminosity, g * self.luminosity, b * self.luminosity)


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert an HSL triple in [0, 1] to an RGB float triple."""
    color = QColor.fromHslF(h % 1.0, s, l)
    return (color.redF(), color.greenF(), color.blueF())


def display_params(actual_size_m: float) -> tuple[float, float]:
    """Return (display_size, display_scale) whose product is `actual_size_m`."""
    if 0 < actual_size_m < MIN_TEXT_SIZE:
        size, scale = MIN_TEXT_SIZE, actual_size_m / MIN_TEXT_SIZE
    else:
        size, scale = actual_size_m, 1.0
    if scale == 0 and actual_size_m > 0:
        scale = MIN_DISPLAY_SCALE
    return size, scale


def label_offset_factor(index: int) -> float:
    """Vertical label offset, as a multiple of object size, for catalog position `index`."""
    return LABEL_OFFSET_EVEN if index % 2 == 0 else LABEL_OFFSET_ODD


def make_label_entry(raw: RawEntry, light_year_threshold: float = LIGHT_YEAR_THRESHOLD_M) -> LabelEntry:
    size, scale = display_params(raw.size_m)
    return LabelEntry(
        name=raw.name,
        actual_size_m=raw.size_m,
        display_size=size,
        display_scale=scale,
        color=hsl_to_rgb(*raw.hsl),
        luminosity=raw.luminosity or 0.0,
        distance_label=format_distance(raw.size_m, light_year_threshold),
        texture_id=raw.texture,
    )


class ScaleCatalog(Sequence):
    """Immutable, size-ordered sequence of `LabelEntry` records."""

    def __init__(self, entries: Sequence[LabelEntry]):
        if not entries:
            raise ValueError("Catalog needs at least one entry")
        self._entries = tuple(entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self):
        return len(self._entries)

    @property
    def first(self) -> LabelEntry:
        return self._entries[0]

    @property
    def last(self) -> LabelEntry:
        return self._entries[-1]

    @property
    def min_size_m(self) -> float:
        return self.first.display_size * self.first.display_scale

    @property
    def max_size_m(self) -> float:
        return self.last.display_size * self.last.display_scale

    def nearest(self, size_m: float) -> LabelEntry:
        """Entry whose size is closest to `size_m` on a log scale."""
        target = math.log(max(size_m, MIN_DISPLAY_SCALE))
        return min(self._entries, key=lambda e: abs(math.log(e.actual_size_m) - target))


def build_catalog(
    raw_entries: Sequence[RawEntry],
    light_year_threshold: float = LIGHT_YEAR_THRESHOLD_M,
) -> ScaleCatalog:
    """Sort raw entries by size and build the immutable catalog.

    Raises ValueError for an empty input or a size that is not a positive,
    finite number of meters.
    """
    for raw in raw_entries:
        if not math.isfinite(raw.size_m) or raw.size_m <= 0:
            raise ValueError(f"Catalog entry '{raw.name}' has invalid size {raw.size_m}")
    ordered = sorted(raw_entries, key=lambda raw: raw.size_m)
    catalog = ScaleCatalog([make_label_entry(raw, light_year_threshold) for raw in ordered])
    logger.debug(
        f"Catalog built: {len(catalog)} objects from "
        f"{catalog.first.distance_label} to {catalog.last.distance_label}"
    )
    return catalog


def _parse_raw_entry(item: Any, position: int) -> RawEntry:
    if not isinstance(item, dict):
        raise ValueError(f"Catalog entry {position} is not an object")
    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"Catalog entry {position} has no name")
    try:
        size_m = float(item["size_m"])
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Catalog entry '{name}' has no numeric size_m") from None
    if not math.isfinite(size_m) or size_m <= 0:
        raise ValueError(f"Catalog entry '{name}' has invalid size {size_m}")
    hsl = item.get("hsl", (0.0, 0.0, 1.0))
    if not isinstance(hsl, (list, tuple)) or len(hsl) != 3:
        raise ValueError(f"Catalog entry '{name}' needs an [h, s, l] color")
    return RawEntry(
        name=name,
        size_m=size_m,
        hsl=tuple(float(c) for c in hsl),
        luminosity=float(item.get("luminosity") or 0.0),
        texture=item.get("texture"),
    )


def load_raw_entries(path: str | Path) -> list[RawEntry]:
    """Read raw catalog entries from a JSON list of objects."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {path} must contain a JSON list")
    entries = [_parse_raw_entry(item, i) for i, item in enumerate(data)]
    logger.info(f"Loaded {len(entries)} catalog entries from {path}")
    return entries


DEFAULT_OBJECTS = [
    RawEntry("DNA", 2e-9, (0.3, 0.5, 0.8)),
    RawEntry("Red Blood Cell", 8e-6, (0.0, 1.0, 0.6)),
    RawEntry("Skin Cell", 3e-5, (0.1, 0.6, 0.6)),
    RawEntry("Salt Grain", 3e-4, (0.0, 0.0, 0.95)),
    RawEntry("Grain of Sand", 1e-3, (0.1, 0.4, 0.7)),
    RawEntry("US Penny", 1.9e-2, (0.07, 0.8, 0.5)),
    RawEntry("Basketball", 2.4e-1, (0.06, 1.0, 0.6)),
    RawEntry("Human", 1.7, (0.1, 0.2, 0.05)),
    RawEntry("Blue Whale Length", 30.0, (0.6, 0.4, 0.25)),
    RawEntry("Saturn V Rocket Height", 111.0, (0.6, 0.05, 0.7)),
    RawEntry("Eiffel Tower Height", 330.0, (0.1, 0.1, 0.4)),
    RawEntry("Central Park Width", 800.0, (0.3, 0.5, 0.3)),
    RawEntry("Mount Everest Height", 8.8e3, (0.6, 0.05, 0.6)),
    RawEntry("Neutron Star", 2e4, (0.5, 0.5, 0.5), luminosity=0.7),
    RawEntry("Switzerland Width", 2.2e5, (0.35, 0.4, 0.4)),
    RawEntry("Italy Length", 1.3e6, (0.4, 0.3, 0.5)),
    RawEntry("Earth", 1.27e7, (0.6, 0.8, 0.5)),
    RawEntry("Jupiter", 1.4e8, (0.5, 0.8, 0.8)),
    RawEntry("Sun", 1.39e9, (0.1, 1.0, 0.7), luminosity=0.5),
    RawEntry("Spica", 10e9, (0.6, 0.7, 0.7), luminosity=0.7),
    RawEntry("Betelgeuse", 1e12, (0.0, 0.7, 0.7), luminosity=0.7),
    RawEntry("Biggest Black Hole", 390e12, (0.0, 0.0, 0.0), luminosity=1.0),
    RawEntry("Ant Nebula", 1.892e16, (0.6, 0.2, 0.3), luminosity=0.5),
    RawEntry("Orion Nebula", 2.270575e17, (0.9, 0.8, 0.4), luminosity=0.6),
    RawEntry("Milky Way Galaxy", 9.46073e20, (0.0, 0.0, 1.0), luminosity=0.6, texture="milky-way.png"),
    RawEntry("Virgo Cluster", 1.41911e23, (0.0, 0.0, 0.2)),
    RawEntry("Laniakea Supercluster", 4.91958e24, (0.1, 0.5, 0.2), luminosity=0.5),
    RawEntry("Observable Universe", 8.79848e26, (0.0, 1.0, 1.0), luminosity=0.5, texture="universe.png"),
]


def default_catalog(light_year_threshold: float = LIGHT_YEAR_THRESHOLD_M) -> ScaleCatalog:
    return build_catalog(DEFAULT_OBJECTS, light_year_threshold)
