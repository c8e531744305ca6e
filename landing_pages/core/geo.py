"""Great-circle distance and bounding box helpers."""

import math
from typing import Tuple

from landing_pages.models import Coordinate

EARTH_RADIUS_MILES = 3959.0
MILES_PER_DEGREE = 69.0


def haversine_miles(origin: Coordinate, target: Coordinate) -> float:
    """Great-circle distance in miles."""
    dlat = math.radians(target.latitude - origin.latitude)
    dlon = math.radians(target.longitude - origin.longitude)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(origin.latitude)) * math.cos(math.radians(target.latitude)) * math.sin(dlon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def bounding_box(center: Coordinate, radius_miles: float) -> Tuple[float, float, float, float]:
    """Approximate square box around ``center`` as (min_lon, min_lat, max_lon, max_lat).

    Uses a flat 69 miles per degree on both axes, so it is only a coarse
    prefilter; callers must still check the exact distance.
    """
    offset = radius_miles / MILES_PER_DEGREE
    return (
        center.longitude - offset,
        center.latitude - offset,
        center.longitude + offset,
        center.latitude + offset,
    )


def format_bbox(bbox: Tuple[float, float, float, float]) -> str:
    return ",".join(str(value) for value in bbox)
