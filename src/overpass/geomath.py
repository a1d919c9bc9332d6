"""Great-circle geometry on a spherical Earth.

All distances are kilometres. The estimator's distance gate is expressed
in the same unit.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

EARTH_RADIUS_KM = 6371.0
"""Mean Earth radius (km)."""

EARTH_CIRCUMFERENCE_KM = 2.0 * math.pi * EARTH_RADIUS_KM
"""Great-circle circumference of the spherical Earth (km)."""


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in degrees.

    Ranges ([-90, 90] and [-180, 180]) are expected but not enforced;
    use :meth:`validated` where input comes from a user.
    """
    latitude: float
    longitude: float

    @classmethod
    def validated(cls, latitude: float, longitude: float) -> GeoPoint:
        """Build a point, rejecting out-of-range coordinates.

        Raises:
            ValueError: If latitude or longitude is outside its range.
        """
        if not -90.0 <= latitude <= 90.0:
            raise ValueError(f"Latitude must be within [-90, 90], got {latitude}")
        if not -180.0 <= longitude <= 180.0:
            raise ValueError(f"Longitude must be within [-180, 180], got {longitude}")
        return cls(latitude, longitude)

    def __str__(self) -> str:
        return f"({self.latitude:.4f}°, {self.longitude:.4f}°)"


# A target is just a point the caller wants the platform to pass over
TargetLocation = GeoPoint


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine great-circle distance between two points (km)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = phi2 - phi1
    dlmb = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    h = min(1.0, h)
    return 2.0 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def initial_bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Initial great-circle bearing from ``a`` towards ``b``.

    Returns:
        Degrees clockwise from north, in [0, 360).
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dlmb = math.radians(b.longitude - a.longitude)

    y = math.sin(dlmb) * math.cos(phi2)
    x = (
        math.cos(phi1) * math.sin(phi2)
        - math.sin(phi1) * math.cos(phi2) * math.cos(dlmb)
    )
    return math.degrees(math.atan2(y, x)) % 360.0


def haversine_km(lat1, lon1, lat2, lon2):
    """Vectorised haversine distance (km) over numpy arrays or scalars."""
    lat1 = np.radians(lat1)
    lat2 = np.radians(lat2)
    dlat = lat2 - lat1
    dlon = np.radians(np.asarray(lon2) - np.asarray(lon1))

    h = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    return 2.0 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))
