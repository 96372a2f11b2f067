"""Pydantic models exchanged with the journal data source and the map view."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from journalmap.spatial.items import Coordinate, LocatedItem


logger = logging.getLogger(__name__)


class LatLng(BaseModel):
    """Simple latitude/longitude container."""

    lat: float = Field(..., description="Latitude in decimal degrees")
    lng: float = Field(..., description="Longitude in decimal degrees")

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "LatLng":
        return cls(lat=coordinate.latitude, lng=coordinate.longitude)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class JournalLocationPayload(BaseModel):
    """Location block of a journal entry document."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @field_validator("address", "city", "country", mode="before")
    @classmethod
    def _strip_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("latitude", "longitude")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("Coordinate must be finite")
        return value


class JournalEntryPayload(BaseModel):
    """A journal entry as supplied by the journal data source."""

    id: str = Field(..., min_length=1)
    title: str = ""
    event_date: datetime = Field(..., alias="eventDate")
    location: Optional[JournalLocationPayload] = None
    image_url: Optional[str] = Field(default=None, alias="imageURL")

    model_config = {"populate_by_name": True}

    @field_validator("event_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Offset-less timestamps are taken as UTC."""
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("location", mode="before")
    @classmethod
    def _drop_unusable_location(cls, value: Any) -> Any:
        """An entry with a bad location is kept but not placed on the map."""
        if value is None or isinstance(value, JournalLocationPayload):
            return value
        try:
            return JournalLocationPayload.model_validate(value)
        except ValueError as exc:
            logger.warning(f"Dropping unusable journal location {value!r}: {exc}")
            return None

    def to_located_item(self) -> LocatedItem:
        location = self.location
        return LocatedItem(
            id=self.id,
            coordinate=(
                Coordinate(latitude=location.latitude, longitude=location.longitude)
                if location is not None
                else None
            ),
            event_timestamp=self.event_date,
            city=location.city if location else None,
            country=location.country if location else None,
            title=self.title or None,
            address=location.address if location else None,
        )


class ClusterAnnotation(BaseModel):
    """One pin (or grouped pin) for the map view, keyed by a stable id."""

    id: str
    title: str
    centroid: LatLng
    count: int
    is_multiple: bool = Field(..., alias="isMultiple")
    entry_ids: List[str] = Field(default_factory=list, alias="entryIds")
    first_entry_id: str = Field(..., alias="firstEntryId")

    model_config = {"populate_by_name": True}


class MapStatisticsSummary(BaseModel):
    total_located: int = Field(0, alias="totalLocated")
    unique_cities: int = Field(0, alias="uniqueCities")
    unique_countries: int = Field(0, alias="uniqueCountries")

    model_config = {"populate_by_name": True}


class RegionSummary(BaseModel):
    center: LatLng
    latitude_delta: float = Field(..., alias="latitudeDelta")
    longitude_delta: float = Field(..., alias="longitudeDelta")

    model_config = {"populate_by_name": True}


class ClusterMapRequest(BaseModel):
    entries: List[JournalEntryPayload] = Field(default_factory=list)
    zoom_level: float = Field(..., alias="zoomLevel")
    zoom_convention: Literal["span", "map_zoom"] = Field(
        "span",
        alias="zoomConvention",
        description="'span': larger = zoomed out; 'map_zoom': web-mercator zoom, larger = zoomed in",
    )
    group_by_place: bool = Field(False, alias="groupByPlace")
    language: Optional[str] = Field(None, description="Locale language code, e.g. 'fr'")
    region_code: Optional[str] = Field(None, alias="regionCode", description="Locale region code, e.g. 'FR'")

    model_config = {"populate_by_name": True}


class ClusterMapResponse(BaseModel):
    clusters: List[ClusterAnnotation]
    statistics: MapStatisticsSummary
    region: RegionSummary
    radius_km: Optional[float] = Field(default=None, alias="radiusKm")

    model_config = {"populate_by_name": True}
