"""Tests for the reference object catalog."""

import json
import math

import pytest

from cosmoscale.core.catalog import (
    DEFAULT_OBJECTS,
    MIN_DISPLAY_SCALE,
    MIN_TEXT_SIZE,
    RawEntry,
    build_catalog,
    default_catalog,
    display_params,
    hsl_to_rgb,
    label_offset_factor,
    load_raw_entries,
)


class TestDefaultCatalog:
    def test_sorted_ascending(self):
        catalog = default_catalog()
        sizes = [entry.actual_size_m for entry in catalog]
        assert sizes == sorted(sizes)
        assert len(catalog) == len(DEFAULT_OBJECTS)

    def test_extremes(self):
        catalog = default_catalog()
        assert catalog.first.name == "DNA"
        assert catalog.last.name == "Observable Universe"
        assert math.isclose(catalog.min_size_m, 2e-9, rel_tol=1e-12)
        assert math.isclose(catalog.max_size_m, 8.79848e26, rel_tol=1e-12)

    def test_display_product_matches_physical_size(self):
        for entry in default_catalog():
            product = entry.display_size * entry.display_scale
            assert math.isclose(product, entry.actual_size_m, rel_tol=1e-12)
            if entry.actual_size_m >= MIN_TEXT_SIZE:
                assert entry.display_size >= MIN_TEXT_SIZE
                assert entry.display_scale == 1.0
            else:
                assert entry.display_size == MIN_TEXT_SIZE

    def test_distance_labels(self):
        labels = {entry.name: entry.distance_label for entry in default_catalog()}
        assert labels["DNA"] == "2 nanometers"
        assert labels["US Penny"] == "1.9 centimeters"
        assert labels["Human"] == "1.7 meters"
        assert labels["Earth"] == "12,700 kilometers"
        assert labels["Ant Nebula"] == "2 light years"
        assert labels["Milky Way Galaxy"] == "100 thousand light years"

    def test_textures_pass_through(self):
        textures = {entry.name: entry.texture_id for entry in default_catalog()}
        assert textures["Milky Way Galaxy"] == "milky-way.png"
        assert textures["Human"] is None

    def test_nearest(self):
        catalog = default_catalog()
        assert catalog.nearest(1.5).name == "Human"
        assert catalog.nearest(1e-20).name == "DNA"
        assert catalog.nearest(1e40).name == "Observable Universe"


class TestBuildCatalog:
    def test_sorts_input_once(self):
        catalog = build_catalog([
            RawEntry("Big", 10.0, (0.0, 0.0, 1.0)),
            RawEntry("Small", 0.1, (0.0, 0.0, 1.0)),
        ])
        assert [e.name for e in catalog] == ["Small", "Big"]

    def test_empty_catalog_rejected(self):
        with pytest.raises(ValueError):
            build_catalog([])

    def test_luminosity_defaults_to_zero(self):
        catalog = build_catalog([RawEntry("Rock", 1.0, (0.1, 0.2, 0.3), luminosity=None)])
        assert catalog.first.luminosity == 0.0
        assert not catalog.first.glows
        assert catalog.first.display_color == catalog.first.color

    def test_glowing_color_is_tinted(self):
        catalog = build_catalog([RawEntry("Star", 1e9, (0.0, 0.0, 1.0), luminosity=0.5)])
        entry = catalog.first
        assert entry.glows
        for plain, tinted in zip(entry.color, entry.display_color):
            assert math.isclose(tinted, plain * 0.5)

    def test_custom_light_year_threshold(self):
        catalog = build_catalog([RawEntry("Far", 2e16, (0.0, 0.0, 1.0))], light_year_threshold=1e17)
        assert catalog.first.distance_label.endswith("billion kilometers")

    @pytest.mark.parametrize("size_m", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_sizes_rejected(self, size_m):
        with pytest.raises(ValueError, match="invalid size"):
            build_catalog([
                RawEntry("Door", 1.0, (0.1, 0.3, 0.5)),
                RawEntry("Broken", size_m, (0.0, 0.0, 1.0)),
            ])


class TestDisplayParams:
    def test_large_sizes_unscaled(self):
        assert display_params(1.7) == (1.7, 1.0)
        assert display_params(MIN_TEXT_SIZE) == (MIN_TEXT_SIZE, 1.0)

    def test_small_sizes_scaled(self):
        size, scale = display_params(1e-6)
        assert size == MIN_TEXT_SIZE
        assert math.isclose(scale, 1e-4)

    def test_scale_never_exactly_zero(self):
        size, scale = display_params(5e-324)
        assert size == MIN_TEXT_SIZE
        assert scale >= MIN_DISPLAY_SCALE


class TestHelpers:
    def test_label_offsets_alternate(self):
        assert label_offset_factor(0) == 0.15
        assert label_offset_factor(1) == -2.0
        assert label_offset_factor(2) == 0.15

    def test_hsl_to_rgb(self):
        white = hsl_to_rgb(0.0, 0.0, 1.0)
        red = hsl_to_rgb(0.0, 1.0, 0.5)
        assert all(math.isclose(c, 1.0, abs_tol=1e-3) for c in white)
        assert red == pytest.approx((1.0, 0.0, 0.0), abs=1e-3)


class TestLoadRawEntries:
    def _write(self, tmp_path, data):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_load_valid_file(self, tmp_path):
        path = self._write(tmp_path, [
            {"name": "Moon", "size_m": 3.47e6, "hsl": [0, 0, 0.7]},
            {"name": "Sun", "size_m": 1.39e9, "hsl": [0.1, 1, 0.7], "luminosity": 0.5},
        ])
        entries = load_raw_entries(path)
        assert [e.name for e in entries] == ["Moon", "Sun"]
        assert entries[1].luminosity == 0.5
        assert entries[0].texture is None

    @pytest.mark.parametrize(
        "item",
        [
            {"size_m": 1.0},
            {"name": "Nothing", "size_m": 0},
            {"name": "Negative", "size_m": -3},
            {"name": "Void", "size_m": "nan"},
            {"name": "Word", "size_m": "big"},
            {"name": "Bad color", "size_m": 1.0, "hsl": [0.1, 0.2]},
        ],
    )
    def test_invalid_entries_rejected(self, tmp_path, item):
        with pytest.raises(ValueError):
            load_raw_entries(self._write(tmp_path, [item]))

    def test_non_list_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            load_raw_entries(self._write(tmp_path, {"name": "Moon"}))
