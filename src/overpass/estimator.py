#!/usr/bin/env python3
"""Trajectory-intercept estimator.

Estimates how many hours remain until a platform passes directly over a
target, given an immutable snapshot of the platform's position and
ground-track velocity.

Decision gates:
    1. Alignment: the heading deviates from the planar direction to the
       target by less than a few degrees and the target is within a
       short great-circle distance.
    2. Overhead: the velocity lies within a degree of the local surface
       normal.

When either gate fails the estimate is the platform's full revisit
cycle. The planar direction to the target (longitude/latitude
differences) is only valid locally; the tight distance gate keeps it
within that regime.
"""
from __future__ import annotations

import logging
import pandas as pd

from dataclasses import dataclass
from enum import Enum, auto
from typing import Mapping, Optional

from .geomath import GeoPoint, TargetLocation, distance
from .tracker import PlatformState
from .vector import UP, Vector, angle_between

logger = logging.getLogger(__name__)


class Decision(Enum):
    """Which branch produced an estimate."""
    COINCIDENT = auto()
    OVERHEAD = auto()
    INTERPOLATED = auto()
    MISALIGNED = auto()
    NOT_OVERHEAD = auto()


# Configuration
@dataclass
class EstimatorThresholds:
    """Gate thresholds and fallback policy.

    Attributes:
        heading_threshold_deg: Maximum heading deviation for alignment.
        distance_threshold_km: Maximum great-circle distance for alignment.
        normal_threshold_deg: Maximum velocity-to-normal angle for overhead.
        revisit_days: Repeat-coverage cycle used as the fallback estimate.
        interpolate_on_alignment: Return ``distance / speed`` instead of the
            fallback when aligned but not overhead.
    """
    heading_threshold_deg: float = 3.0
    distance_threshold_km: float = 20.0
    normal_threshold_deg: float = 1.0
    revisit_days: int = 16
    interpolate_on_alignment: bool = False

    @property
    def fallback_hours(self) -> float:
        return float(self.revisit_days * 24)

    @classmethod
    def for_landsat(cls) -> EstimatorThresholds:
        """Landsat 8/9 repeat cycle (16 days)."""
        return cls(revisit_days=16)

    @classmethod
    def interpolating(cls) -> EstimatorThresholds:
        """Default gates, estimating ``distance / speed`` once aligned."""
        return cls(interpolate_on_alignment=True)


# Result
@dataclass(frozen=True)
class InterceptEstimate:
    """Estimate with the geometry that produced it.

    Attributes:
        hours: Estimated hours until overhead.
        decision: Branch that produced ``hours``.
        ground_distance_km: Great-circle distance to the target.
        heading_angle_deg: Heading deviation from the target direction
            (None when the target is coincident).
        normal_angle_deg: Velocity angle to the surface normal (None when
            the alignment gate was not passed).
    """
    hours: float
    decision: Decision
    ground_distance_km: float
    heading_angle_deg: Optional[float] = None
    normal_angle_deg: Optional[float] = None

    @property
    def is_fallback(self) -> bool:
        return self.decision in (Decision.MISALIGNED, Decision.NOT_OVERHEAD)

    def to_dict(self) -> dict:
        """Serialize to a flat dictionary for DataFrame construction."""
        return {
            "hours": round(self.hours, 4),
            "decision": self.decision.name,
            "fallback": self.is_fallback,
            "distance_km": round(self.ground_distance_km, 3),
            "heading_angle_deg": (
                None if self.heading_angle_deg is None else round(self.heading_angle_deg, 3)
            ),
            "normal_angle_deg": (
                None if self.normal_angle_deg is None else round(self.normal_angle_deg, 3)
            ),
        }

    def summary(self) -> str:
        """One-line human-readable summary."""
        return (
            f"{self.hours:.2f} h ({self.decision.name}, "
            f"{self.ground_distance_km:.1f} km away)"
        )


# Estimator
class InterceptEstimator:
    """Estimates hours until a platform is overhead a target.

    Args:
        thresholds: Gate thresholds. Defaults to the Landsat settings.

    Example:
        >>> estimator = InterceptEstimator()
        >>> hours = estimator.estimate_hours_until_overhead(state, GeoPoint(0.0, 0.1))
    """
    def __init__(self, thresholds: Optional[EstimatorThresholds] = None) -> None:
        self.thresholds = thresholds or EstimatorThresholds()

    def estimate_hours_until_overhead(
        self,
        platform: PlatformState,
        target: TargetLocation,
    ) -> float:
        """Hours until ``platform`` passes over ``target``.

        Returns:
            ``distance / speed`` when both gates pass, 0.0 when the target
            coincides with the platform, otherwise the revisit fallback.

        Raises:
            DegenerateVectorError: If the platform velocity is zero.
        """
        return self.evaluate(platform, target).hours

    def evaluate(self, platform: PlatformState, target: TargetLocation) -> InterceptEstimate:
        """Run both gates and return the full estimate."""
        t = self.thresholds
        pos = platform.position
        velocity = platform.velocity

        to_target = Vector(
            target.longitude - pos.longitude,
            target.latitude - pos.latitude,
        )
        if to_target.is_zero():
            return InterceptEstimate(0.0, Decision.COINCIDENT, 0.0)

        heading_angle = angle_between(velocity, to_target)
        ground_distance = distance(target, pos)

        if heading_angle >= t.heading_threshold_deg or ground_distance >= t.distance_threshold_km:
            logger.debug(
                "Alignment gate failed for %s: heading %.3f°, distance %.3f km",
                target,
                heading_angle,
                ground_distance,
            )
            return InterceptEstimate(
                t.fallback_hours,
                Decision.MISALIGNED,
                ground_distance,
                heading_angle,
            )

        normal_angle = angle_between(velocity, UP)
        speed = velocity.magnitude()

        if normal_angle < t.normal_threshold_deg:
            return InterceptEstimate(
                ground_distance / speed,
                Decision.OVERHEAD,
                ground_distance,
                heading_angle,
                normal_angle,
            )

        if t.interpolate_on_alignment:
            return InterceptEstimate(
                ground_distance / speed,
                Decision.INTERPOLATED,
                ground_distance,
                heading_angle,
                normal_angle,
            )

        logger.debug(
            "Aligned with %s but normal angle %.3f° fails the overhead gate",
            target,
            normal_angle,
        )
        return InterceptEstimate(
            t.fallback_hours,
            Decision.NOT_OVERHEAD,
            ground_distance,
            heading_angle,
            normal_angle,
        )


# Batch utils
def estimate_batch(
    platform: PlatformState,
    targets: Mapping[str, GeoPoint],
    thresholds: Optional[EstimatorThresholds] = None,
) -> pd.DataFrame:
    """Estimate overhead times for several named targets.

    Args:
        platform: Snapshot shared by every target.
        targets: Mapping of target name to location.
        thresholds: Gate thresholds (defaults to Landsat).

    Returns:
        DataFrame with one row per target, sorted by estimated hours.
    """
    estimator = InterceptEstimator(thresholds)
    rows = []
    for name, target in targets.items():
        row = {"target": name, "latitude": target.latitude, "longitude": target.longitude}
        row.update(estimator.evaluate(platform, target).to_dict())
        rows.append(row)

    if not rows:
        return pd.DataFrame()

    df = pd.DataFrame(rows)
    return df.sort_values("hours", kind="stable").reset_index(drop=True)
