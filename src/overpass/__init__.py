"""Overpass: estimate when an orbital platform is overhead a target.

Tracks a platform along a constant-speed great-circle ground track and
estimates the hours until it passes directly over a ground target, falling
back to the platform's revisit cycle when no near-term pass is found.

Modules:
    vector:      Immutable 2D/3D vector with dot product, magnitude and angles.
    geomath:     Haversine distance and great-circle bearings.
    tracker:     Pure-function position propagation and the tracked state.
    estimator:   Alignment/overhead gates and the time-to-overhead estimate.
    platform:    Landsat platform model with observation settings.
    tle_parser:  Element-set parsing for orbital period derivation.
    celestrak:   CelesTrak client with caching.
    viz:         Ground-track plots.
    cli:         Command-line interface.

Example:
    >>> from overpass.geomath import GeoPoint
    >>> from overpass.platform import Landsat
    >>>
    >>> sat = Landsat(cloud_coverage=20)
    >>> _ = sat.refresh_position(0.5)
    >>> sat.estimate_hours_until_overhead(GeoPoint(45.0, -93.0))
    384.0
"""

__version__ = "0.1.0"
