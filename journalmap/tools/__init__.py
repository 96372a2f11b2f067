"""Configuration and map-view glue."""

from .config_loader import ConfigLoader, get_config, load_radius_policy
from .annotations import (
    annotation_from_cluster,
    build_cluster_map,
    located_items_from_payloads,
)

__all__ = [
    "ConfigLoader",
    "get_config",
    "load_radius_policy",
    "annotation_from_cluster",
    "build_cluster_map",
    "located_items_from_payloads",
]
