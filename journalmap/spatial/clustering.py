"""
Adaptive clustering of geotagged journal entries into map annotations.

This module provides:
1. A zoom-to-radius policy (step function over the map's zoom level)
2. Greedy seed-based grouping by great-circle distance
3. Stable cluster identifiers derived from member ids
4. Centroid and member ordering for each cluster
5. An alternative grouping by (country, city) for very wide views

Zoom convention: larger zoom values mean the map is more zoomed out (the
value behaves like the visible latitude span). Hosts whose zoom grows when
zooming in should convert first, see
:func:`journalmap.spatial.region.latitude_delta_from_map_zoom`.

Grouping is seed-based: an item joins a group when it is within the radius
of the group's seed, never of another member. A chain of items each close
to its neighbour therefore does not collapse into one group.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .geo import haversine_km_many
from .items import Coordinate, LocatedItem
from .statistics import compute_statistics


logger = logging.getLogger(__name__)

CLUSTER_ID_SEPARATOR = "-"
UNKNOWN_COUNTRY = "Unknown country"
UNKNOWN_CITY = "Unknown city"


@dataclass(frozen=True)
class ClusterRadiusPolicy:
    """Step function mapping a zoom level to a clustering radius."""

    breakpoints: Tuple[Tuple[float, float], ...]
    """(threshold, radius_km) rows; first row with zoom > threshold wins."""

    floor_radius_km: float = 1.0
    """Radius used when no row matches (street-level zoom)."""

    def radius_for_zoom(self, zoom_level: float) -> float:
        """Return the clustering radius in kilometres for ``zoom_level``."""

        for threshold, radius_km in self.breakpoints:
            if zoom_level > threshold:
                return radius_km
        return self.floor_radius_km

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ClusterRadiusPolicy":
        """
        Build a policy from a ``cluster_radius`` configuration mapping.

        Expected shape::

            floor_km: 1
            breakpoints:
              - {above: 15.0, radius_km: 500}
              - {above: 10.0, radius_km: 200}

        Rows are re-ordered by descending threshold.

        Raises:
            ValueError: If the mapping is missing rows or has non-positive radii
        """
        rows = config.get("breakpoints")
        if not rows:
            raise ValueError("cluster_radius config needs a non-empty 'breakpoints' list")

        breakpoints: List[Tuple[float, float]] = []
        for row in rows:
            try:
                threshold = float(row["above"])
                radius_km = float(row["radius_km"])
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"Invalid breakpoint row: {row!r}") from exc
            if not math.isfinite(threshold) or not radius_km > 0:
                raise ValueError(f"Invalid breakpoint row: {row!r}")
            breakpoints.append((threshold, radius_km))

        floor_km = float(config.get("floor_km", 1.0))
        if not floor_km > 0:
            raise ValueError(f"floor_km must be positive, got {floor_km}")

        breakpoints.sort(key=lambda r: r[0], reverse=True)
        return cls(breakpoints=tuple(breakpoints), floor_radius_km=floor_km)


DEFAULT_RADIUS_POLICY = ClusterRadiusPolicy(
    breakpoints=(
        (15.0, 500.0),  # world
        (10.0, 200.0),  # country
        (5.0, 100.0),   # region
        (2.0, 50.0),    # city
        (1.0, 25.0),    # district
        (0.5, 15.0),    # street
        (0.2, 5.0),     # detailed
    ),
    floor_radius_km=1.0,
)


@dataclass(frozen=True, eq=False)
class Cluster:
    """One map annotation: a single pin or a group of nearby entries."""

    id: str
    """Stable identifier derived from the set of member ids."""

    centroid: Coordinate
    """Arithmetic mean of member coordinates."""

    members: Tuple[LocatedItem, ...] = field(default_factory=tuple)
    """Members, most recent event first."""

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def is_multiple(self) -> bool:
        return len(self.members) > 1

    @property
    def first_member(self) -> LocatedItem:
        return self.members[0]

    @property
    def member_ids(self) -> List[str]:
        return [m.id for m in self.members]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cluster):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def cluster_id_for(items: Iterable[LocatedItem]) -> str:
    """Identifier for a group of items; independent of their order."""

    return CLUSTER_ID_SEPARATOR.join(sorted(item.id for item in items))


def compute_centroid(coordinates: Sequence[Coordinate]) -> Coordinate:
    """
    Mean latitude and mean longitude of ``coordinates``.

    Plain arithmetic mean (not geodesic). A single coordinate is returned
    unchanged.
    """
    if len(coordinates) == 1:
        return coordinates[0]
    lats = np.array([c.latitude for c in coordinates], dtype=float)
    lngs = np.array([c.longitude for c in coordinates], dtype=float)
    return Coordinate(latitude=float(lats.mean()), longitude=float(lngs.mean()))


def _timestamp_key(item: LocatedItem) -> datetime:
    # naive timestamps are read as UTC so they compare with aware ones
    ts = item.event_timestamp
    if ts.tzinfo is None or ts.utcoffset() is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def _order_members(items: Iterable[LocatedItem]) -> Tuple[LocatedItem, ...]:
    # id order first so equal timestamps do not depend on input order
    by_id = sorted(items, key=lambda item: item.id)
    return tuple(sorted(by_id, key=_timestamp_key, reverse=True))


def _build_cluster(group: Sequence[LocatedItem]) -> Cluster:
    return Cluster(
        id=cluster_id_for(group),
        centroid=compute_centroid([item.coordinate for item in group]),
        members=_order_members(group),
    )


def _unique_located(items: Iterable[LocatedItem]) -> List[LocatedItem]:
    """Located items in input order; later repeats of an id are dropped."""

    seen: set = set()
    located: List[LocatedItem] = []
    skipped_unlocated = 0
    skipped_duplicate = 0
    for item in items:
        if not item.has_location:
            skipped_unlocated += 1
            continue
        if item.id in seen:
            skipped_duplicate += 1
            continue
        seen.add(item.id)
        located.append(item)

    if skipped_duplicate:
        logger.warning(f"Ignoring {skipped_duplicate} located item(s) with a repeated id")
    if skipped_unlocated and logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Skipping {skipped_unlocated} item(s) without a usable coordinate")
    return located


def compute_clusters(
    items: Iterable[LocatedItem],
    zoom_level: float,
    *,
    policy: Optional[ClusterRadiusPolicy] = None,
) -> List[Cluster]:
    """
    Group located items into clusters for the given zoom level.

    Args:
        items: Journal items; items without a coordinate are ignored
        zoom_level: Current map zoom (larger = more zoomed out)
        policy: Radius policy (uses DEFAULT_RADIUS_POLICY if None)

    Returns:
        Clusters in the order their seed item was first encountered.

    Every located item lands in exactly one cluster. Cluster ids depend only
    on membership, so an unchanged group keeps its id across calls.
    """
    if policy is None:
        policy = DEFAULT_RADIUS_POLICY

    located = _unique_located(items)
    if not located:
        return []

    radius_km = policy.radius_for_zoom(zoom_level)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Clustering {len(located)} items: zoom_level={zoom_level}, radius_km={radius_km}"
        )

    lats = np.array([item.coordinate.latitude for item in located], dtype=float)
    lngs = np.array([item.coordinate.longitude for item in located], dtype=float)
    assigned = np.zeros(len(located), dtype=bool)

    clusters: List[Cluster] = []
    for seed_idx, seed in enumerate(located):
        if assigned[seed_idx]:
            continue
        assigned[seed_idx] = True

        # Distance is always measured from the seed, never from other members
        distances = haversine_km_many(lats[seed_idx], lngs[seed_idx], lats, lngs)
        joins = ~assigned & (distances < radius_km)
        member_idx = np.flatnonzero(joins)
        assigned[joins] = True

        group = [seed] + [located[i] for i in member_idx]
        clusters.append(_build_cluster(group))

    if logger.isEnabledFor(logging.DEBUG):
        multiple = sum(1 for c in clusters if c.is_multiple)
        logger.debug(f"Built {len(clusters)} clusters ({multiple} grouped pins)")

    return clusters


def cluster_by_place(items: Iterable[LocatedItem]) -> List[Cluster]:
    """
    Group located items by (country, city) instead of distance.

    Useful for world-scale views where every city should keep its own pin
    regardless of how close neighbouring cities are. Entries missing a
    country or city share an "unknown" bucket within their group.
    """
    groups: Dict[Tuple[str, str], List[LocatedItem]] = {}
    for item in _unique_located(items):
        key = (item.country or UNKNOWN_COUNTRY, item.city or UNKNOWN_CITY)
        groups.setdefault(key, []).append(item)

    clusters = []
    for (country, city), group in groups.items():
        cluster = _build_cluster(group)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Place cluster {city}, {country}: {cluster.count} entries")
        clusters.append(cluster)
    return clusters


class ClusterEngine:
    """
    Stateless entry point for the map view.

    Holds no state; every method is a static pass-through.
    """

    compute_clusters = staticmethod(compute_clusters)
    compute_statistics = staticmethod(compute_statistics)
    cluster_by_place = staticmethod(cluster_by_place)

    @staticmethod
    def radius_for_zoom(zoom_level: float, policy: Optional[ClusterRadiusPolicy] = None) -> float:
        return (policy or DEFAULT_RADIUS_POLICY).radius_for_zoom(zoom_level)


__all__ = [
    "CLUSTER_ID_SEPARATOR",
    "Cluster",
    "ClusterEngine",
    "ClusterRadiusPolicy",
    "DEFAULT_RADIUS_POLICY",
    "cluster_by_place",
    "cluster_id_for",
    "compute_centroid",
    "compute_clusters",
]
