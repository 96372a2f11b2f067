"""Map-view helpers built on top of :mod:`journalmap.spatial`."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from journalmap.spatial import (
    Cluster,
    ClusterRadiusPolicy,
    cluster_by_place,
    compute_clusters,
    compute_statistics,
    default_region,
    fit_region,
    latitude_delta_from_map_zoom,
)
from journalmap.spatial.items import LocatedItem

from ..schemas.models import (
    ClusterAnnotation,
    ClusterMapRequest,
    ClusterMapResponse,
    JournalEntryPayload,
    LatLng,
    MapStatisticsSummary,
    RegionSummary,
)
from .config_loader import load_radius_policy


logger = logging.getLogger(__name__)

GROUPED_PIN_TITLE = "Cluster"


def located_items_from_payloads(entries: Iterable[JournalEntryPayload]) -> List[LocatedItem]:
    """Convert entry payloads into engine items, keeping input order."""

    return [entry.to_located_item() for entry in entries]


def annotation_from_cluster(cluster: Cluster) -> ClusterAnnotation:
    """Describe a cluster for the map view."""

    first = cluster.first_member
    if cluster.is_multiple:
        title = GROUPED_PIN_TITLE
    else:
        title = first.title or first.display_name

    return ClusterAnnotation(
        id=cluster.id,
        title=title,
        centroid=LatLng.from_coordinate(cluster.centroid),
        count=cluster.count,
        is_multiple=cluster.is_multiple,
        entry_ids=cluster.member_ids,
        first_entry_id=first.id,
    )


def build_cluster_map(
    request: ClusterMapRequest,
    *,
    policy: Optional[ClusterRadiusPolicy] = None,
) -> ClusterMapResponse:
    """
    Clusters, header statistics and fitted region for one viewport update.

    ``request.zoom_level`` is interpreted according to
    ``request.zoom_convention``; map-zoom values are converted to a latitude
    span before the radius policy is applied. Without an explicit ``policy``
    the radius table of the active profile is used. When no entry is
    located the region is the locale default for the request.
    """
    if policy is None:
        policy = load_radius_policy()

    items = located_items_from_payloads(request.entries)

    zoom_level = request.zoom_level
    if request.zoom_convention == "map_zoom":
        zoom_level = latitude_delta_from_map_zoom(zoom_level)

    if request.group_by_place:
        clusters = cluster_by_place(items)
        radius_km = None
    else:
        clusters = compute_clusters(items, zoom_level, policy=policy)
        radius_km = policy.radius_for_zoom(zoom_level)

    stats = compute_statistics(items)
    region = fit_region(items)
    if region is None:
        region = default_region(request.language, request.region_code)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Cluster map: {len(request.entries)} entries, {stats.total_located} located, "
            f"{len(clusters)} annotations"
        )

    return ClusterMapResponse(
        clusters=[annotation_from_cluster(c) for c in clusters],
        statistics=MapStatisticsSummary(**stats.to_dict()),
        region=RegionSummary(
            center=LatLng.from_coordinate(region.center),
            latitude_delta=region.latitude_delta,
            longitude_delta=region.longitude_delta,
        ),
        radius_km=radius_km,
    )
