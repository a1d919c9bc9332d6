"""Exception hierarchy for overpass."""

from __future__ import annotations

from typing import Optional


class OverpassError(Exception):
    """Base exception for all overpass errors."""


class DegenerateVectorError(OverpassError, ValueError):
    """A zero-magnitude vector was used where an angle is required."""


class UnsetPositionError(OverpassError, RuntimeError):
    """Platform state was queried before the tracker produced a position."""


class TLEFetchError(OverpassError):
    """CelesTrak request failed or returned no usable element set."""

    def __init__(
        self,
        message: str,
        *,
        norad_id: Optional[int] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.norad_id = norad_id
        self.status_code = status_code
        super().__init__(message)
