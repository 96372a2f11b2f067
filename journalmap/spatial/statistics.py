"""Aggregate statistics shown in the map header bubble."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable

from .items import LocatedItem, items_to_frame


@dataclass(frozen=True)
class MapStatistics:
    """
    Counts over the entries that have a location.

    Attributes:
        total_located: Number of entries with a usable coordinate
        unique_cities: Distinct non-null city names among them
        unique_countries: Distinct non-null country names among them
    """

    total_located: int = 0
    unique_cities: int = 0
    unique_countries: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def compute_statistics(items: Iterable[LocatedItem]) -> MapStatistics:
    """Count located entries and their distinct cities and countries."""

    df = items_to_frame(items)
    if df.empty:
        return MapStatistics()

    # nunique() ignores missing values
    return MapStatistics(
        total_located=int(len(df)),
        unique_cities=int(df["city"].nunique(dropna=True)),
        unique_countries=int(df["country"].nunique(dropna=True)),
    )
