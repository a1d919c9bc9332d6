"""Landsat platform model.

Composes a :class:`~overpass.tracker.PositionTracker` and an
:class:`~overpass.estimator.InterceptEstimator`. Each estimate is computed
from an immutable snapshot of the tracked state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .estimator import EstimatorThresholds, InterceptEstimator
from .geomath import GeoPoint
from .tracker import OrbitParameters, PlatformState, PositionTracker

logger = logging.getLogger(__name__)


@dataclass
class ObservationConfig:
    """Observation settings consumed by imaging collaborators.

    Attributes:
        cloud_coverage: Acceptable cloud coverage percentage (0-100).
    """
    cloud_coverage: int = 0

    def __post_init__(self) -> None:
        _check_coverage(self.cloud_coverage)


class Landsat:
    """The Landsat satellite as a trackable platform.

    Args:
        cloud_coverage: Acceptable cloud coverage percentage (0-100).
        orbit: Propagation parameters. Defaults to a nominal Landsat pass.
        thresholds: Estimator gate thresholds. Defaults to Landsat's.
    """
    def __init__(
        self,
        cloud_coverage: int = 0,
        orbit: Optional[OrbitParameters] = None,
        thresholds: Optional[EstimatorThresholds] = None,
    ) -> None:
        self.tracker = PositionTracker(orbit or OrbitParameters.for_landsat())
        self.estimator = InterceptEstimator(thresholds or EstimatorThresholds.for_landsat())
        self.observation = ObservationConfig(cloud_coverage)

    @property
    def cloud_coverage(self) -> int:
        return self.observation.cloud_coverage

    @cloud_coverage.setter
    def cloud_coverage(self, value: int) -> None:
        _check_coverage(value)
        self.observation.cloud_coverage = value

    def refresh_position(self, elapsed_hours: float) -> PlatformState:
        """Track the platform ``elapsed_hours`` after its orbit epoch."""
        return self.tracker.update(elapsed_hours)

    def current_position(self) -> GeoPoint:
        return self.tracker.current_position()

    def current_state(self) -> PlatformState:
        return self.tracker.current_state()

    def estimate_hours_until_overhead(self, target: GeoPoint) -> float:
        """Hours until the platform is over ``target``.

        Raises:
            UnsetPositionError: If the position has never been refreshed.
            DegenerateVectorError: If the platform is not moving.
        """
        snapshot = self.tracker.current_state()
        hours = self.estimator.estimate_hours_until_overhead(snapshot, target)
        logger.info("Estimated %.2f h until overhead %s", hours, target)
        return hours


def _check_coverage(value: int) -> None:
    if not 0 <= value <= 100:
        raise ValueError(f"Cloud coverage must be within [0, 100], got {value}")
