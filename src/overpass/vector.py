"""Small immutable vector type for ground-track geometry.

Vectors carry two or three components. A two-component vector is a
ground-plane offset (x = east, y = north) and behaves as a 3D vector with
``z = 0`` whenever it meets a 3D operand such as the local surface normal.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .exceptions import DegenerateVectorError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Vector:
    """An immutable 2D/3D vector.

    Attributes:
        x: East component.
        y: North component.
        z: Up component (0.0 for ground-plane vectors).
    """
    x: float
    y: float
    z: float = 0.0

    def dot(self, other: Vector) -> float:
        """Dot product with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def magnitude(self) -> float:
        """Euclidean length, always >= 0."""
        return math.hypot(self.x, self.y, self.z)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def scaled(self, factor: float) -> Vector:
        return Vector(self.x * factor, self.y * factor, self.z * factor)


UP = Vector(0.0, 0.0, 1.0)
"""Local surface normal in the east/north/up frame."""


def angle_between(a: Vector, b: Vector) -> float:
    """Angle between two vectors in degrees, in [0, 180].

    The cosine is clamped to [-1, 1] so that rounding on (anti)parallel
    vectors never reaches ``acos`` out of domain.

    Raises:
        DegenerateVectorError: If either vector has zero magnitude.
    """
    mag_a = a.magnitude()
    mag_b = b.magnitude()
    if mag_a == 0 or mag_b == 0:
        raise DegenerateVectorError(
            f"Angle undefined for zero-magnitude vector ({a!r}, {b!r})"
        )

    return acos_degrees(_unit(a).dot(_unit(b)))


def acos_degrees(cos_theta: float) -> float:
    """Inverse cosine in degrees, clamping rounding overshoot to [-1, 1]."""
    if cos_theta > 1.0 or cos_theta < -1.0:
        logger.debug("Clamping acos argument %.17g", cos_theta)
        cos_theta = max(-1.0, min(1.0, cos_theta))

    return math.degrees(math.acos(cos_theta))


def _unit(v: Vector) -> Vector:
    """Unit vector along a nonzero ``v``.

    Divides by the largest component first so tiny or huge components
    neither underflow nor overflow.
    """
    scale = max(abs(v.x), abs(v.y), abs(v.z))
    v = Vector(v.x / scale, v.y / scale, v.z / scale)
    mag = v.magnitude()
    return Vector(v.x / mag, v.y / mag, v.z / mag)
