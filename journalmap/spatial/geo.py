"""Great-circle distance helpers."""

from __future__ import annotations

import math

import numpy as np


EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance in kilometres between two lat/lng points (degrees)."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c


def haversine_km_many(lat: float, lng: float, lats: np.ndarray, lngs: np.ndarray) -> np.ndarray:
    """
    Distances in kilometres from one point to each of ``lats``/``lngs``.

    Same formula as :func:`haversine_km`, evaluated over numpy arrays.
    """

    lats = np.asarray(lats, dtype=float)
    lngs = np.asarray(lngs, dtype=float)
    if lats.size == 0:
        return np.empty(0, dtype=float)

    phi1 = np.radians(lat)
    phi2 = np.radians(lats)
    d_phi = np.radians(lats - lat)
    d_lambda = np.radians(lngs - lng)

    a = np.sin(d_phi / 2.0) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2.0) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c
