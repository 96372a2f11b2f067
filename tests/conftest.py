"""
Pytest configuration and shared fixtures for journal-map tests.

This file provides:
- Located journal items around Paris, Lyon and New York
- Raw entry payloads as sent by the journal data source
- Common test utilities
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pytest

from journalmap.spatial.items import Coordinate, LocatedItem


# ==============================================================================
# Item Builders
# ==============================================================================

BASE_TIME = datetime(2025, 6, 1, 12, 0, 0)


def make_item(
    item_id: str,
    lat: Optional[float],
    lng: Optional[float],
    *,
    days: int = 0,
    city: Optional[str] = None,
    country: Optional[str] = None,
    title: Optional[str] = None,
) -> LocatedItem:
    """Build a LocatedItem; pass lat=None for an entry without location."""
    coordinate = None if lat is None else Coordinate(latitude=lat, longitude=lng)
    return LocatedItem(
        id=item_id,
        coordinate=coordinate,
        event_timestamp=BASE_TIME + timedelta(days=days),
        city=city,
        country=country,
        title=title,
    )


# ==============================================================================
# Sample Items
# ==============================================================================

@pytest.fixture
def paris_a() -> LocatedItem:
    """Paris, Hotel de Ville."""
    return make_item("A", 48.8566, 2.3522, days=0, city="Paris", country="France", title="Picnic")


@pytest.fixture
def paris_b() -> LocatedItem:
    """Paris, Louvre (~1.2km from A)."""
    return make_item("B", 48.8606, 2.3376, days=3, city="Paris", country="France", title="Museum")


@pytest.fixture
def new_york_c() -> LocatedItem:
    """New York, thousands of km from Paris."""
    return make_item("C", 40.7128, -74.0060, days=1, city="New York", country="USA", title="Trip")


@pytest.fixture
def paris_ny_items(paris_a, paris_b, new_york_c) -> List[LocatedItem]:
    return [paris_a, paris_b, new_york_c]


@pytest.fixture
def french_items() -> List[LocatedItem]:
    """Three located entries: two in Paris, one in Lyon, plus one unlocated."""
    return [
        make_item("p1", 48.8566, 2.3522, city="Paris", country="France"),
        make_item("p2", 48.8606, 2.3376, city="Paris", country="France"),
        make_item("l1", 45.7640, 4.8357, city="Lyon", country="France"),
        make_item("x1", None, None, city="Marseille", country="France"),
    ]


@pytest.fixture
def line_items() -> List[LocatedItem]:
    """Items every 0.1 degrees of longitude along the equator (~11.1km apart)."""
    return [make_item(f"e{i}", 0.0, i * 0.1, days=i) for i in range(8)]


# ==============================================================================
# Sample Payloads
# ==============================================================================

@pytest.fixture
def entry_payloads() -> List[Dict[str, Any]]:
    """Journal entry documents in the data source's camelCase shape."""
    return [
        {
            "id": "A",
            "title": "Picnic",
            "eventDate": "2025-06-01T12:00:00",
            "location": {"latitude": 48.8566, "longitude": 2.3522, "city": "Paris", "country": "France"},
        },
        {
            "id": "B",
            "title": "Museum",
            "eventDate": "2025-06-04T12:00:00",
            "location": {"latitude": 48.8606, "longitude": 2.3376, "city": "Paris", "country": "France"},
        },
        {
            "id": "C",
            "title": "Trip",
            "eventDate": "2025-06-02T12:00:00",
            "location": {"latitude": 40.7128, "longitude": -74.0060, "city": "New York", "country": "USA"},
        },
        {
            "id": "D",
            "title": "At home",
            "eventDate": "2025-06-05T12:00:00",
        },
    ]


# ==============================================================================
# Utilities
# ==============================================================================

def assert_approx_equal(a: float, b: float, tolerance: float = 0.01):
    """Assert two floats are approximately equal."""
    assert abs(a - b) < tolerance, f"{a} != {b} (tolerance={tolerance})"


def id_sets(clusters) -> set:
    """Member-id sets of clusters, ignoring cluster order."""
    return {frozenset(c.member_ids) for c in clusters}
