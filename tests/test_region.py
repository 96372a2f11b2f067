"""
Unit Tests for Viewport Helpers (journalmap.spatial.region)

Tests region fitting, locale default regions and zoom-convention conversion.
"""

import math

import pytest

from journalmap.spatial.items import Coordinate
from journalmap.spatial.region import (
    MapRegion,
    default_region,
    fit_region,
    latitude_delta_from_map_zoom,
)

from tests.conftest import assert_approx_equal, make_item


# ==============================================================================
# Region Fitting Tests
# ==============================================================================

class TestFitRegion:
    """Test fitting a region around located entries."""

    def test_no_located_items(self):
        assert fit_region([]) is None
        assert fit_region([make_item("x", None, None)]) is None

    def test_single_item(self, paris_a):
        region = fit_region([paris_a])

        assert region == MapRegion(center=paris_a.coordinate, latitude_delta=0.05, longitude_delta=0.05)

    def test_bounding_box_with_margin(self, paris_ny_items):
        region = fit_region(paris_ny_items)

        assert_approx_equal(region.center.latitude, (48.8606 + 40.7128) / 2, 1e-9)
        assert_approx_equal(region.center.longitude, (2.3522 - 74.0060) / 2, 1e-9)
        assert_approx_equal(region.latitude_delta, (48.8606 - 40.7128) * 1.3, 1e-9)
        assert_approx_equal(region.longitude_delta, (2.3522 + 74.0060) * 1.3, 1e-9)

    def test_minimum_span(self):
        items = [make_item("a", 10.0, 10.0), make_item("b", 10.0, 10.0)]
        region = fit_region(items)

        assert region.latitude_delta == 0.01
        assert region.longitude_delta == 0.01


# ==============================================================================
# Default Region Tests
# ==============================================================================

class TestDefaultRegion:
    """Test locale-based fallback regions from the default profile."""

    @pytest.mark.parametrize(
        "language, region_code, expected_lat",
        [
            ("en", "US", 39.8283),
            ("en", "CA", 56.1304),
            ("fr", "CA", 56.1304),
            ("en", "GB", 55.3781),
            ("en", "AU", -25.2744),
            ("fr", "FR", 46.2276),
            ("fr", "BE", 46.2276),
            ("fr", None, 46.2276),
            ("es", "ES", 40.4637),
            ("de", "DE", 51.1657),
            ("it", "IT", 41.8719),
            ("ja", "JP", 36.2048),
            ("pt", "BR", -14.2350),
            ("nl", "NL", 54.5260),
            ("sv", "SE", 54.5260),
            ("en", "us", 39.8283),
        ],
    )
    def test_locale_rules(self, language, region_code, expected_lat):
        region = default_region(language, region_code)
        assert region.center.latitude == expected_lat

    def test_unknown_locale_uses_world_view(self):
        region = default_region("xx", "ZZ")

        assert region.center == Coordinate(latitude=20.0, longitude=0.0)
        assert region.latitude_delta == 120.0

    def test_no_locale(self):
        assert default_region().latitude_delta == 120.0

    def test_explicit_table(self):
        regions = {
            "rules": [
                {"name": "home", "region": ["NZ"], "center": {"lat": -41.0, "lng": 174.0}, "span": {"lat": 5, "lng": 6}},
            ],
        }

        region = default_region("en", "NZ", regions=regions)

        assert region == MapRegion(center=Coordinate(-41.0, 174.0), latitude_delta=5.0, longitude_delta=6.0)

    def test_empty_table_falls_back_to_world(self):
        region = default_region("en", "US", regions={})
        assert region.center == Coordinate(latitude=20.0, longitude=0.0)
        assert region.longitude_delta == 120.0


# ==============================================================================
# Zoom Convention Tests
# ==============================================================================

class TestZoomConversion:
    """Test converting web-mercator zoom into a latitude span."""

    def test_world_zoom(self):
        assert latitude_delta_from_map_zoom(0) == 360.0

    def test_halves_per_level(self):
        assert latitude_delta_from_map_zoom(1) == 180.0
        assert latitude_delta_from_map_zoom(10) == 360.0 / 1024

    def test_zooming_in_shrinks_span(self):
        assert latitude_delta_from_map_zoom(15) < latitude_delta_from_map_zoom(5)

    @pytest.mark.parametrize("zoom, expected", [(1100, 0.0), (-1100, math.inf)])
    def test_extreme_zoom_saturates(self, zoom, expected):
        assert latitude_delta_from_map_zoom(zoom) == expected

    def test_nan_zoom_passes_through(self):
        assert math.isnan(latitude_delta_from_map_zoom(math.nan))
