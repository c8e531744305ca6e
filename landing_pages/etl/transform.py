"""Utilities for transforming Mapbox place features into locations."""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from landing_pages.core.geo import haversine_miles
from landing_pages.models import Coordinate, Location

logger = logging.getLogger(__name__)


def parse_region(context: Iterable[Dict[str, Any]]) -> Tuple[Optional[str], Optional[str]]:
    """Return (state name, two-letter code) from a feature's context hierarchy."""
    for entry in context or []:
        if str(entry.get("id", "")).startswith("region"):
            short_code = entry.get("short_code") or ""
            code = short_code.upper().replace("US-", "") or None
            return entry.get("text"), code
    return None, None


def feature_coordinate(feature: Dict[str, Any]) -> Coordinate:
    """Mapbox orders ``center`` as [lon, lat]."""
    lon, lat = feature["center"]
    return Coordinate(latitude=float(lat), longitude=float(lon))


def _population(feature: Dict[str, Any]) -> Optional[int]:
    value = (feature.get("properties") or {}).get("population")
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def to_location(feature: Dict[str, Any], center: Coordinate) -> Optional[Location]:
    """Build a Location from a feature, or None when city or state is missing.

    Raises KeyError/TypeError/ValueError on a malformed ``center``.
    """
    _, state_code = parse_region(feature.get("context") or [])
    city = feature.get("text")
    if not city or not state_code:
        return None

    coordinate = feature_coordinate(feature)
    return Location(
        city=city,
        state=state_code,
        latitude=coordinate.latitude,
        longitude=coordinate.longitude,
        distance=haversine_miles(center, coordinate),
        population=_population(feature),
    )
