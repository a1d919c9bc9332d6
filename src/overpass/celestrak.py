"""CelesTrak GP client for fetching current element sets.

Used to seed :class:`~overpass.tracker.OrbitParameters` with a real
orbital period and epoch. No account is required. Responses are cached
on disk for a day and requests are spaced to stay polite.

The cache directory can be set with the ``OVERPASS_CACHE_DIR``
environment variable, or passed to the ``CelestrakClient`` constructor.
"""

from __future__ import annotations

import os
import time
import logging
from pathlib import Path
from typing import Optional

import requests

from .exceptions import TLEFetchError
from .tle_parser import TLE

logger = logging.getLogger(__name__)

GP_URL = "https://celestrak.org/NORAD/elements/gp.php"

LANDSAT_8 = 39084
LANDSAT_9 = 49260

REQUEST_DELAY = 1.0  # seconds between requests
CACHE_HOURS = 24


class CelestrakClient:
    """Client for CelesTrak's GP element-set endpoint."""

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        env_dir = os.environ.get("OVERPASS_CACHE_DIR")
        self.cache_dir = Path(cache_dir or env_dir or "data/cache")
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.session = session or requests.Session()
        self.timeout = timeout
        self._last_request_time = 0.0

    def _rate_limit(self):
        elapsed = time.time() - self._last_request_time
        if elapsed < REQUEST_DELAY:
            time.sleep(REQUEST_DELAY - elapsed)
        self._last_request_time = time.time()

    def _fetch_text(self, norad_id: int, use_cache: bool = True) -> str:
        """Fetch the raw TLE text for a catalog number."""
        cache_file = self.cache_dir / f"gp_{norad_id}.tle"

        if use_cache and cache_file.exists():
            age_hours = (time.time() - cache_file.stat().st_mtime) / 3600
            if age_hours < CACHE_HOURS:
                logger.debug("Cache hit: %s", cache_file.name)
                return cache_file.read_text()

        self._rate_limit()
        logger.info("Querying CelesTrak for NORAD %d", norad_id)
        try:
            resp = self.session.get(
                GP_URL,
                params={"CATNR": norad_id, "FORMAT": "TLE"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TLEFetchError(f"Request for NORAD {norad_id} failed: {e}", norad_id=norad_id) from e

        if resp.status_code != 200:
            raise TLEFetchError(
                f"CelesTrak returned HTTP {resp.status_code} for NORAD {norad_id}",
                norad_id=norad_id,
                status_code=resp.status_code,
            )

        if use_cache:
            cache_file.write_text(resp.text)
        return resp.text

    def get_latest_tle(self, norad_id: int, use_cache: bool = True) -> TLE:
        """Fetch the current element set for one satellite.

        Raises:
            TLEFetchError: On HTTP failure or when no element set is returned.
        """
        raw = self._fetch_text(norad_id, use_cache)
        try:
            tles = TLE.parse_batch(raw)
        except ValueError as e:
            raise TLEFetchError(f"Malformed TLE for NORAD {norad_id}: {e}", norad_id=norad_id) from e

        if not tles:
            raise TLEFetchError(f"No element set found for NORAD {norad_id}", norad_id=norad_id)
        return tles[0]

    def get_many(self, norad_ids: list[int]) -> dict[int, TLE]:
        """Fetch element sets for several satellites.

        Satellites that fail are logged and left out of the result.
        """
        from tqdm import tqdm

        results = {}
        for norad_id in tqdm(norad_ids, desc="Fetching TLEs"):
            try:
                results[norad_id] = self.get_latest_tle(norad_id)
            except TLEFetchError as e:
                logger.warning("Failed to fetch NORAD %d: %s", norad_id, e)

        return results
