"""Nominatim (OpenStreetMap) geocoder for property addresses.

Nominatim is a free service whose usage policy allows at most one request
per second, so every lookup goes through a single rate limiter and a lock:
enrichment is sequential no matter how many ingestion tasks are running.

Usage::

    resolver = NominatimResolver()
    point = resolver.resolve("CALLE MAYOR 1", "VALLADOLID", "Valladolid", "Spain", "47014")
    if point:
        print(point.longitude, point.latitude)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from boewatch.domain.models import Coordinates
from boewatch.domain.models.values import DEFAULT_TEXT
from boewatch.infrastructure.http.fetcher import RateLimiter
from boewatch.infrastructure.observability import get_logger

LOGGER = get_logger(__name__)

DEFAULT_COUNTRY = "Spain"
NOMINATIM_URL = "http://nominatim.openstreetmap.org/search.php"


@dataclass
class GeocodingResult:
    """Coordinates plus the query tier that produced them."""

    coordinates: Coordinates
    source: str  # 'street' or 'city'
    display_name: str = ""


class NominatimResolver:
    """Rate-limited Nominatim client with a street then city fallback."""

    def __init__(
        self,
        *,
        base_url: str = NOMINATIM_URL,
        min_interval_seconds: float = 1.0,
        timeout_seconds: float = 10.0,
        user_agent: str = "",
        session: requests.Session | None = None,
    ) -> None:
        from boewatch import __version__

        self.base_url = base_url
        self.timeout = timeout_seconds
        self.rate_limiter = RateLimiter(min_interval_seconds)
        self.session = session or requests.Session()
        self.session.headers.update(
            {"User-Agent": user_agent or f"boewatch/{__version__}"}
        )
        self._lock = threading.Lock()

    def _search(self, params: Dict[str, str]) -> Optional[Dict[str, Any]]:
        self.rate_limiter.wait_sync("nominatim")
        query = {**params, "countrycodes": "es", "format": "jsonv2"}
        LOGGER.debug("Nominatim query: %s", query)
        try:
            response = self.session.get(self.base_url, params=query, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            LOGGER.warning("Nominatim request failed for %s: %s", params, exc)
            return None
        except ValueError as exc:
            LOGGER.warning("Nominatim returned invalid JSON for %s: %s", params, exc)
            return None
        if isinstance(data, list) and data and isinstance(data[0], dict):
            return data[0]
        return None

    @staticmethod
    def _coordinates(place: Dict[str, Any]) -> Optional[Coordinates]:
        try:
            return Coordinates(longitude=float(place["lon"]), latitude=float(place["lat"]))
        except (KeyError, TypeError, ValueError) as exc:
            LOGGER.warning("Nominatim result without usable lon/lat: %s", exc)
            return None

    def geocode(
        self,
        address: str,
        city: str,
        province: str,
        country: str = DEFAULT_COUNTRY,
        postal_code: str = "",
    ) -> Optional[GeocodingResult]:
        """Look the place up, first by street, then by city and postal code."""
        coarse = {"city": city, "state": province, "country": country, "postalcode": postal_code}
        coarse = {key: value for key, value in coarse.items() if value and value != DEFAULT_TEXT}
        attempts = []
        if address and address != DEFAULT_TEXT:
            attempts.append(("street", {"street": address, **coarse}))
        attempts.append(("city", coarse))

        with self._lock:
            for source, params in attempts:
                place = self._search(params)
                if place is None:
                    continue
                coordinates = self._coordinates(place)
                if coordinates is None:
                    continue
                return GeocodingResult(
                    coordinates=coordinates,
                    source=source,
                    display_name=str(place.get("display_name", "")),
                )
        return None

    def resolve(
        self,
        address: str,
        city: str,
        province: str,
        country: str = DEFAULT_COUNTRY,
        postal_code: str = "",
    ) -> Optional[Coordinates]:
        """Coordinates of a property, or ``None`` when nothing usable was found."""
        result = self.geocode(address, city, province, country, postal_code)
        if result is None:
            LOGGER.info("No coordinates found for %s, %s (%s)", city, province, postal_code)
            return None
        return result.coordinates

    def close(self) -> None:
        self.session.close()


__all__ = ["DEFAULT_COUNTRY", "GeocodingResult", "NominatimResolver"]
