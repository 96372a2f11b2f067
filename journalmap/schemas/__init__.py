"""Payload and response models for the journal map."""

from .models import (
    ClusterAnnotation,
    ClusterMapRequest,
    ClusterMapResponse,
    JournalEntryPayload,
    JournalLocationPayload,
    LatLng,
    MapStatisticsSummary,
    RegionSummary,
)

__all__ = [
    "ClusterAnnotation",
    "ClusterMapRequest",
    "ClusterMapResponse",
    "JournalEntryPayload",
    "JournalLocationPayload",
    "LatLng",
    "MapStatisticsSummary",
    "RegionSummary",
]
