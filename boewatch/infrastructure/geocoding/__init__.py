"""Geocoding adapters used to enrich property records with coordinates."""

from .nominatim import DEFAULT_COUNTRY, GeocodingResult, NominatimResolver

__all__ = ["DEFAULT_COUNTRY", "GeocodingResult", "NominatimResolver"]
