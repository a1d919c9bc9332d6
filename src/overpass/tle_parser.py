"""Minimal Two-Line Element parsing for orbit-parameter derivation.

Only the fields needed to seed the constant-speed ground-track model are
extracted: identity, epoch, inclination, RAAN, eccentricity and mean
motion. Period, semi-major axis and altitude are derived on construction.

References:
    - Kelso, T.S. "CelesTrak TLE Format Documentation"
      https://celestrak.org/columns/v04n03/
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

MU_EARTH = 398600.4418
"""Earth gravitational parameter (km³/s²)."""

R_EARTH_EQUATORIAL = 6378.137
"""Earth equatorial radius (km), used for altitude."""

SOLAR_DAY = 86400.0
"""Seconds in a solar day."""


@dataclass(slots=True)
class TLE:
    """A parsed element set with derived quantities.

    Attributes:
        name: Spacecraft name from line 0 (if present).
        norad_id: NORAD catalog number.
        epoch_dt: Element epoch (UTC, naive).
        inclination: Orbital inclination (degrees).
        raan: Right ascension of ascending node (degrees).
        eccentricity: Orbital eccentricity.
        mean_motion: Mean motion (revolutions per day).
        period: Derived orbital period (seconds).
        semi_major_axis: Derived semi-major axis (km).
        altitude: Derived mean altitude (km).
    """
    name: Optional[str]
    norad_id: int
    epoch_dt: datetime
    inclination: float
    raan: float
    eccentricity: float
    mean_motion: float

    period: float = field(init=False)
    semi_major_axis: float = field(init=False)
    altitude: float = field(init=False)

    def __post_init__(self) -> None:
        if self.mean_motion <= 0:
            raise ValueError(f"Mean motion must be positive, got {self.mean_motion}")
        self.period = SOLAR_DAY / self.mean_motion
        n_rad_s = self.mean_motion * 2.0 * math.pi / SOLAR_DAY
        self.semi_major_axis = (MU_EARTH / n_rad_s**2) ** (1.0 / 3.0)
        self.altitude = self.semi_major_axis - R_EARTH_EQUATORIAL

    @property
    def period_minutes(self) -> float:
        return self.period / 60.0

    @staticmethod
    def parse(line1: str, line2: str, name: Optional[str] = None) -> TLE:
        """Parse line 1 and line 2 of an element set.

        Raises:
            ValueError: If a line is malformed or the NORAD IDs differ.
        """
        l1 = line1.ljust(69)
        l2 = line2.ljust(69)

        if l1[0] != "1":
            raise ValueError(f"Line 1 must start with '1', got '{l1[0]}'")
        if l2[0] != "2":
            raise ValueError(f"Line 2 must start with '2', got '{l2[0]}'")

        _check_line(l1, 1)
        _check_line(l2, 2)

        norad_id = int(l1[2:7])
        if int(l2[2:7]) != norad_id:
            raise ValueError(f"NORAD ID mismatch: {norad_id} vs {int(l2[2:7])}")

        yy = int(l1[18:20])
        year = 1900 + yy if yy >= 57 else 2000 + yy
        epoch_dt = datetime(year, 1, 1) + timedelta(days=float(l1[20:32]) - 1.0)

        return TLE(
            name=name.strip() if name else None,
            norad_id=norad_id,
            epoch_dt=epoch_dt,
            inclination=float(l2[8:16]),
            raan=float(l2[17:25]),
            eccentricity=float(f"0.{l2[26:33].strip()}"),
            mean_motion=float(l2[52:63]),
        )

    @staticmethod
    def parse_batch(text: str) -> list[TLE]:
        """Parse every 2-line or 3-line element set found in ``text``."""
        lines = [ln.rstrip() for ln in text.strip().splitlines() if ln.strip()]
        tles: list[TLE] = []
        i = 0

        while i < len(lines):
            if lines[i].startswith("1 ") and i + 1 < len(lines) and lines[i + 1].startswith("2 "):
                tles.append(TLE.parse(lines[i], lines[i + 1]))
                i += 2
            elif (
                i + 2 < len(lines)
                and lines[i + 1].startswith("1 ")
                and lines[i + 2].startswith("2 ")
            ):
                tles.append(TLE.parse(lines[i + 1], lines[i + 2], name=lines[i]))
                i += 3
            else:
                logger.debug("Skipping unparseable line: %r", lines[i])
                i += 1

        return tles


def _check_line(line: str, line_num: int) -> None:
    """Warn (but keep parsing) on a modulo-10 checksum mismatch."""
    if not line[68].isdigit():
        return

    total = sum(int(ch) if ch.isdigit() else (1 if ch == "-" else 0) for ch in line[:68])
    if total % 10 != int(line[68]):
        logger.warning(
            "Checksum mismatch on line %d: expected %s, computed %d",
            line_num,
            line[68],
            total % 10,
        )
