"""Input types for the map engine: coordinates and located journal items."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

import pandas as pd


ITEM_FRAME_COLUMNS = ["id", "lat", "lng", "city", "country", "event_timestamp"]


@dataclass(frozen=True)
class Coordinate:
    """Geographic position in decimal degrees."""

    latitude: float
    longitude: float

    @property
    def is_valid(self) -> bool:
        """True when both components are finite and inside WGS84 bounds."""

        try:
            lat = float(self.latitude)
            lng = float(self.longitude)
        except (TypeError, ValueError):
            return False
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


@dataclass(frozen=True)
class LocatedItem:
    """
    A journal entry as seen by the map.

    Attributes:
        id: Opaque identifier, stable for the entry's lifetime
        coordinate: Position, or None when the entry has no location
        event_timestamp: When the event happened (ordering inside a cluster)
        city: Reverse-geocoded city name, if known
        country: Reverse-geocoded country name, if known
        title: Entry title shown on single-pin annotations
        address: Free-form address, used when city/country are missing
    """

    id: str
    coordinate: Optional[Coordinate]
    event_timestamp: datetime
    city: Optional[str] = None
    country: Optional[str] = None
    title: Optional[str] = None
    address: Optional[str] = None

    @property
    def has_location(self) -> bool:
        return self.coordinate is not None and self.coordinate.is_valid

    @property
    def display_name(self) -> str:
        if _present(self.city) and _present(self.country):
            return f"{self.city}, {self.country}"
        if _present(self.address):
            return str(self.address)
        return "Location"


def _present(value: Optional[str]) -> bool:
    return value is not None and bool(str(value).strip())


def located_only(items: Iterable[LocatedItem]) -> List[LocatedItem]:
    """Return the items carrying a valid coordinate, in input order."""

    return [item for item in items if item.has_location]


def items_to_frame(items: Iterable[LocatedItem]) -> pd.DataFrame:
    """
    Tabular view of located items.

    Items without a valid coordinate are skipped. Row order follows input
    order and the index is a plain ``RangeIndex``.
    """

    rows = []
    for item in items:
        if not item.has_location:
            continue
        rows.append(
            dict(
                id=item.id,
                lat=float(item.coordinate.latitude),
                lng=float(item.coordinate.longitude),
                city=item.city,
                country=item.country,
                event_timestamp=item.event_timestamp,
            )
        )
    if not rows:
        return pd.DataFrame(columns=ITEM_FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=ITEM_FRAME_COLUMNS)
