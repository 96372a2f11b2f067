"""Viewport helpers for the journal map."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

import numpy as np

from .items import Coordinate, LocatedItem, located_only


logger = logging.getLogger(__name__)

WORLD_REGION_SPAN = 120.0


@dataclass(frozen=True)
class MapRegion:
    """Visible map area: centre plus latitude/longitude spans in degrees."""

    center: Coordinate
    latitude_delta: float
    longitude_delta: float


def fit_region(
    items: Iterable[LocatedItem],
    *,
    margin: float = 1.3,
    min_delta: float = 0.01,
    single_delta: float = 0.05,
) -> Optional[MapRegion]:
    """
    Region showing every located item.

    Args:
        items: Journal items; only located ones are considered
        margin: Multiplier applied to the bounding-box extent
        min_delta: Smallest span returned for multiple items
        single_delta: Span used when only one item is located

    Returns:
        MapRegion, or None when no item has a location
    """
    coordinates = [item.coordinate for item in located_only(items)]
    if not coordinates:
        return None

    if len(coordinates) == 1:
        return MapRegion(center=coordinates[0], latitude_delta=single_delta, longitude_delta=single_delta)

    lats = [c.latitude for c in coordinates]
    lngs = [c.longitude for c in coordinates]
    min_lat, max_lat = min(lats), max(lats)
    min_lng, max_lng = min(lngs), max(lngs)

    return MapRegion(
        center=Coordinate(latitude=(min_lat + max_lat) / 2, longitude=(min_lng + max_lng) / 2),
        latitude_delta=max((max_lat - min_lat) * margin, min_delta),
        longitude_delta=max((max_lng - min_lng) * margin, min_delta),
    )


def latitude_delta_from_map_zoom(zoom: float) -> float:
    """
    Convert a web-mercator zoom level to a latitude span in degrees.

    Map controls such as Google Maps use zoom levels that grow when zooming
    in (0 = whole world). The clustering radius policy expects the opposite
    convention, so values from those controls go through this first.

    Extreme levels saturate instead of raising: very large zooms give 0.0
    (street level), very negative ones give inf (widest radius).
    """
    with np.errstate(over="ignore", under="ignore"):
        return 360.0 * float(np.exp2(-float(zoom)))


def _matches(rule_value: Union[None, str, Sequence[str]], actual: Optional[str]) -> bool:
    if rule_value is None:
        return True
    if actual is None:
        return False
    if isinstance(rule_value, str):
        return rule_value.upper() == actual.upper()
    return actual.upper() in {str(v).upper() for v in rule_value}


def _region_from_config(entry: Mapping[str, Any]) -> MapRegion:
    center = entry["center"]
    span = entry["span"]
    return MapRegion(
        center=Coordinate(latitude=float(center["lat"]), longitude=float(center["lng"])),
        latitude_delta=float(span["lat"]),
        longitude_delta=float(span["lng"]),
    )


def default_region(
    language: Optional[str] = None,
    region_code: Optional[str] = None,
    regions: Optional[Mapping[str, Any]] = None,
) -> MapRegion:
    """
    Fallback viewport for a user with no located entries.

    Rules from the ``default_regions`` table of the active profile are tried
    in order; a rule matches when its ``language`` and ``region`` (each a
    code, a list of codes, or absent for "any") match the locale. The
    table's ``fallback`` entry, or a world view, is used otherwise.
    """
    if regions is None:
        from ..tools.config_loader import get_config

        regions = get_config().get("default_regions", {})

    for rule in regions.get("rules", []):
        if _matches(rule.get("language"), language) and _matches(rule.get("region"), region_code):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Default region '{rule.get('name')}' for locale {language}_{region_code}")
            return _region_from_config(rule)

    fallback = regions.get("fallback")
    if fallback:
        return _region_from_config(fallback)
    return MapRegion(
        center=Coordinate(latitude=20.0, longitude=0.0),
        latitude_delta=WORLD_REGION_SPAN,
        longitude_delta=WORLD_REGION_SPAN,
    )
