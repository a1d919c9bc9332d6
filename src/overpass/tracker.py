#!/usr/bin/env python3
"""Platform position tracking.

The ground track is modelled as a great circle traversed at constant
ground speed from a fixed epoch position and heading. Position and
velocity are a pure function of the elapsed time since the epoch, so
repeated refreshes never accumulate drift.

Velocity vectors use the local east/north/up frame in km/h; the up
component is always zero for a ground track.
"""
from __future__ import annotations

import logging
import math
import threading
import numpy as np
import pandas as pd

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .exceptions import UnsetPositionError
from .geomath import EARTH_CIRCUMFERENCE_KM, EARTH_RADIUS_KM, GeoPoint
from .tle_parser import TLE
from .vector import Vector

logger = logging.getLogger(__name__)

LANDSAT_PERIOD_MINUTES = 98.9
"""Nominal Landsat 8/9 orbital period (minutes)."""

LANDSAT_DESCENDING_HEADING_DEG = 188.2
"""Ground-track heading of a descending Landsat pass at the equator."""


# Configuration
@dataclass(frozen=True)
class OrbitParameters:
    """Fixed inputs of the constant-speed propagation model.

    Attributes:
        epoch_position: Sub-platform point at the epoch.
        heading_deg: Ground-track heading at the epoch, clockwise from north.
        ground_speed_kmh: Speed of the sub-platform point (km/h).
        epoch: Wall-clock time of the epoch position, if known.
    """
    epoch_position: GeoPoint
    heading_deg: float
    ground_speed_kmh: float
    epoch: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.ground_speed_kmh < 0 or not math.isfinite(self.ground_speed_kmh):
            raise ValueError(
                f"Ground speed must be finite and >= 0, got {self.ground_speed_kmh}"
            )

    @classmethod
    def from_period(
        cls,
        period_minutes: float,
        epoch_position: GeoPoint,
        heading_deg: float,
        epoch: Optional[datetime] = None,
    ) -> OrbitParameters:
        """Derive the ground speed from an orbital period.

        One period covers one great-circle circumference.
        """
        if period_minutes <= 0:
            raise ValueError(f"Orbital period must be positive, got {period_minutes}")
        speed = EARTH_CIRCUMFERENCE_KM / (period_minutes / 60.0)
        return cls(epoch_position, heading_deg, speed, epoch)

    @classmethod
    def from_tle(
        cls,
        tle: TLE,
        epoch_position: GeoPoint,
        heading_deg: float,
    ) -> OrbitParameters:
        """Seed the model from a parsed element set's period and epoch."""
        return cls.from_period(tle.period_minutes, epoch_position, heading_deg, tle.epoch_dt)

    @classmethod
    def for_landsat(cls, epoch: Optional[datetime] = None) -> OrbitParameters:
        """Landsat descending pass crossing the equator at the prime meridian.
        """
        return cls.from_period(
            LANDSAT_PERIOD_MINUTES,
            GeoPoint(0.0, 0.0),
            LANDSAT_DESCENDING_HEADING_DEG,
            epoch,
        )


# Snapshot
@dataclass(frozen=True)
class PlatformState:
    """Immutable snapshot of a tracked platform.

    Attributes:
        position: Current sub-platform point.
        velocity: Ground-track velocity (east, north, up) in km/h.
        elapsed_hours: Time since the orbit epoch.
    """
    position: GeoPoint
    velocity: Vector
    elapsed_hours: float

    @property
    def heading_deg(self) -> float:
        """Heading clockwise from north, in [0, 360)."""
        return math.degrees(math.atan2(self.velocity.x, self.velocity.y)) % 360.0

    @property
    def speed_kmh(self) -> float:
        return self.velocity.magnitude()


@runtime_checkable
class Trackable(Protocol):
    """Anything able to report and refresh its own tracked position."""

    def refresh_position(self, elapsed_hours: float) -> PlatformState: ...

    def current_position(self) -> GeoPoint: ...

    def current_state(self) -> PlatformState: ...


# Tracker
class PositionTracker:
    """Tracks a platform along its constant-speed great-circle ground track.

    The tracker starts Uninitialized and becomes Tracked on the first
    :meth:`update`. Writes happen under a lock; readers get the immutable
    :class:`PlatformState` snapshot.

    Args:
        orbit: Fixed propagation parameters.

    Example:
        >>> tracker = PositionTracker(OrbitParameters.for_landsat())
        >>> state = tracker.update(0.25)
        >>> state.position
    """
    def __init__(self, orbit: OrbitParameters) -> None:
        self.orbit = orbit
        self._state: Optional[PlatformState] = None
        self._lock = threading.Lock()

    @property
    def is_tracked(self) -> bool:
        return self._state is not None

    def propagate(self, elapsed_hours: float) -> PlatformState:
        """Platform state at ``elapsed_hours`` after the epoch.

        Pure: does not touch the tracked state. Negative values
        back-propagate along the same great circle.
        """
        if not math.isfinite(elapsed_hours):
            raise ValueError(f"Elapsed time must be finite, got {elapsed_hours}")

        lat, lon, v_east, v_north = self._great_circle(np.array([elapsed_hours], dtype=float))
        return PlatformState(
            position=GeoPoint(float(lat[0]), float(lon[0])),
            velocity=Vector(float(v_east[0]), float(v_north[0]), 0.0),
            elapsed_hours=float(elapsed_hours),
        )

    def update(self, elapsed_hours: float) -> PlatformState:
        """Set the tracked state to the position ``elapsed_hours`` after the epoch."""
        state = self.propagate(elapsed_hours)
        with self._lock:
            first = self._state is None
            self._state = state
        self._log_update(state, first)
        return state

    def _log_update(self, state: PlatformState, first: bool) -> None:
        if first:
            logger.info("Tracking started at %s", state.position)
        logger.debug(
            "Position at t=%.4f h: %s heading %.2f°",
            state.elapsed_hours,
            state.position,
            state.heading_deg,
        )

    def advance(self, delta_hours: float) -> PlatformState:
        """Move the tracked clock forward by ``delta_hours``.

        Only the elapsed-time scalar accumulates; position is recomputed
        from the epoch.

        Raises:
            ValueError: If ``delta_hours`` is negative.
        """
        if delta_hours < 0:
            raise ValueError(f"Cannot advance by a negative interval ({delta_hours} h)")
        with self._lock:
            first = self._state is None
            base = 0.0 if first else self._state.elapsed_hours
            state = self.propagate(base + delta_hours)
            self._state = state
        self._log_update(state, first)
        return state

    def update_at(self, when: datetime) -> PlatformState:
        """Set the tracked state for a wall-clock time.

        Raises:
            ValueError: If the orbit has no epoch datetime.
        """
        if self.orbit.epoch is None:
            raise ValueError("Orbit parameters carry no epoch; use update() instead")
        elapsed = (when - self.orbit.epoch).total_seconds() / 3600.0
        return self.update(elapsed)

    def current_state(self) -> PlatformState:
        """Latest snapshot.

        Raises:
            UnsetPositionError: If no update has happened yet.
        """
        with self._lock:
            state = self._state
        if state is None:
            raise UnsetPositionError("Position requested before the first tracker update")
        return state

    def current_position(self) -> GeoPoint:
        return self.current_state().position

    def ground_track(
        self,
        duration_hours: float,
        step_minutes: float = 1.0,
        start_hours: float = 0.0,
    ) -> pd.DataFrame:
        """Tabulate the ground track over a time window.

        Args:
            duration_hours: Length of the window.
            step_minutes: Sample spacing.
            start_hours: Window start, relative to the epoch.

        Returns:
            DataFrame with one row per sample: ``elapsed_hours``,
            ``latitude``, ``longitude``, ``heading_deg``,
            ``velocity_east_kmh``, ``velocity_north_kmh`` and, when the
            orbit has an epoch, ``time``.
        """
        if step_minutes <= 0:
            raise ValueError(f"Step must be positive, got {step_minutes}")
        if duration_hours < 0:
            raise ValueError(f"Duration must be >= 0, got {duration_hours}")

        step_h = step_minutes / 60.0
        n = int(math.floor(duration_hours / step_h + 1e-9)) + 1
        t = start_hours + np.arange(n) * step_h

        lat, lon, v_east, v_north = self._great_circle(t)
        df = pd.DataFrame({
            "elapsed_hours": t,
            "latitude": lat,
            "longitude": lon,
            "heading_deg": np.degrees(np.arctan2(v_east, v_north)) % 360.0,
            "velocity_east_kmh": v_east,
            "velocity_north_kmh": v_north,
        })
        if self.orbit.epoch is not None:
            df["time"] = pd.Timestamp(self.orbit.epoch) + pd.to_timedelta(t, unit="h")
        return df

    def _great_circle(self, t: np.ndarray):
        """Propagate along the epoch great circle for an array of times.

        Works on Earth-centred unit vectors: the position rotates from
        ``p0`` towards the epoch heading ``d0`` by the travelled angle.
        """
        o = self.orbit
        lat0 = math.radians(o.epoch_position.latitude)
        lon0 = math.radians(o.epoch_position.longitude)
        hdg = math.radians(o.heading_deg)

        p0 = np.array([
            math.cos(lat0) * math.cos(lon0),
            math.cos(lat0) * math.sin(lon0),
            math.sin(lat0),
        ])
        east0, north0 = _local_axes(np.array([lat0]), np.array([lon0]))
        d0 = math.sin(hdg) * east0[0] + math.cos(hdg) * north0[0]

        theta = (o.ground_speed_kmh * t / EARTH_RADIUS_KM)[:, None]
        p = p0 * np.cos(theta) + d0 * np.sin(theta)
        d = -p0 * np.sin(theta) + d0 * np.cos(theta)

        lat = np.arcsin(np.clip(p[:, 2], -1.0, 1.0))
        lon = np.arctan2(p[:, 1], p[:, 0])
        east, north = _local_axes(lat, lon)

        v_east = o.ground_speed_kmh * np.sum(d * east, axis=1)
        v_north = o.ground_speed_kmh * np.sum(d * north, axis=1)
        return np.degrees(lat), np.degrees(lon), v_east, v_north


def _local_axes(lat: np.ndarray, lon: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Unit east and north vectors (ECEF) at each lat/lon in radians."""
    east = np.stack([-np.sin(lon), np.cos(lon), np.zeros_like(lon)], axis=1)
    north = np.stack([
        -np.sin(lat) * np.cos(lon),
        -np.sin(lat) * np.sin(lon),
        np.cos(lat),
    ], axis=1)
    return east, north
