"""
journalmap.spatial: Clustering, statistics and viewport helpers for the journal map.

This module provides greedy seed-based clustering with stable cluster ids.
"""

from .items import Coordinate, LocatedItem, items_to_frame, located_only
from .geo import haversine_km, haversine_km_many
from .statistics import MapStatistics, compute_statistics
from .clustering import (
    Cluster,
    ClusterEngine,
    ClusterRadiusPolicy,
    DEFAULT_RADIUS_POLICY,
    cluster_by_place,
    cluster_id_for,
    compute_centroid,
    compute_clusters,
)
from .region import MapRegion, default_region, fit_region, latitude_delta_from_map_zoom

__all__ = [
    "Coordinate",
    "LocatedItem",
    "items_to_frame",
    "located_only",
    "haversine_km",
    "haversine_km_many",
    "MapStatistics",
    "compute_statistics",
    "Cluster",
    "ClusterEngine",
    "ClusterRadiusPolicy",
    "DEFAULT_RADIUS_POLICY",
    "cluster_by_place",
    "cluster_id_for",
    "compute_centroid",
    "compute_clusters",
    "MapRegion",
    "default_region",
    "fit_region",
    "latitude_delta_from_map_zoom",
]
