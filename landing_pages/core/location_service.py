"""Seed-city geocoding and nearby city discovery."""

import logging
from typing import List, Optional, Set, Tuple

import requests

from landing_pages.core.errors import (
    InvalidInputError,
    LocationResolutionError,
    NetworkError,
    NotFoundError,
    RateLimitError,
)
from landing_pages.core.geo import bounding_box, format_bbox
from landing_pages.core.throttle import Throttle, get_throttle
from landing_pages.etl.transform import feature_coordinate, to_location
from landing_pages.models import MAX_RADIUS_MILES, MIN_RADIUS_MILES, Coordinate, Location
from landing_pages.vendors import mapbox

logger = logging.getLogger(__name__)

NEARBY_RESULT_LIMIT = 50
RATE_LIMIT_MESSAGE = "Too many requests while looking up {target}. Please try again in a few minutes."
NETWORK_MESSAGE = "Network error while looking up {target}. Please check your connection."


class _ProviderService:
    def __init__(
        self,
        api_key: str,
        *,
        throttle: Optional[Throttle] = None,
        timeout: int = mapbox.DEFAULT_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.throttle = throttle or get_throttle()
        self.timeout = timeout

    def _search(
        self,
        query: str,
        *,
        limit: int,
        bbox: Optional[str],
        target: str,
        failure: str,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ) -> dict:
        self.throttle.wait()
        try:
            return mapbox.search_places(query, self.api_key, limit=limit, bbox=bbox, timeout=self.timeout)
        except mapbox.MapboxError as exc:
            if exc.status_code == 429:
                message = RATE_LIMIT_MESSAGE.format(target=target)
                raise RateLimitError(message, city=city, state=state) from exc
            raise LocationResolutionError(failure, city=city, state=state) from exc
        except ValueError as exc:
            # undecodable JSON body
            raise LocationResolutionError(failure, city=city, state=state) from exc
        except requests.RequestException as exc:
            if getattr(exc, "response", None) is None:
                message = NETWORK_MESSAGE.format(target=target)
                raise NetworkError(message, city=city, state=state) from exc
            raise LocationResolutionError(failure, city=city, state=state) from exc


class GeoResolver(_ProviderService):
    """Resolve a (city, state) pair to coordinates."""

    def resolve(self, city: str, state: str) -> Coordinate:
        failure = f"Failed to get coordinates for {city}, {state}. Please verify the location."
        query = f"{city}, {state}, United States"
        logger.info("Resolving coordinates for %s, %s", city, state)
        payload = self._search(
            query,
            limit=1,
            bbox=None,
            target=f"{city}, {state}",
            failure=failure,
            city=city,
            state=state,
        )

        features = payload.get("features") or []
        if not features:
            raise NotFoundError(f"Location not found for {city}, {state}", city=city, state=state)
        try:
            return feature_coordinate(features[0])
        except (KeyError, TypeError, ValueError) as exc:
            raise LocationResolutionError(failure, city=city, state=state) from exc


class NearbyLocationFinder(_ProviderService):
    """Find distinct cities within a radius of a center point."""

    def find(self, center: Coordinate, radius_miles: float) -> List[Location]:
        if not MIN_RADIUS_MILES <= radius_miles <= MAX_RADIUS_MILES:
            raise InvalidInputError(
                f"radius must be between {MIN_RADIUS_MILES} and {MAX_RADIUS_MILES} miles, got {radius_miles}"
            )

        bbox = format_bbox(bounding_box(center, radius_miles))
        query = f"{center.longitude},{center.latitude}"
        payload = self._search(
            query,
            limit=NEARBY_RESULT_LIMIT,
            bbox=bbox,
            target=f"cities near ({center.latitude:.4f}, {center.longitude:.4f})",
            failure="Failed to find nearby locations. Please try again.",
        )

        locations: List[Location] = []
        seen: Set[Tuple[str, str]] = set()
        for feature in payload.get("features") or []:
            try:
                location = to_location(feature, center)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Error processing location: %s", exc)
                continue
            if location is None:
                logger.debug("Skipping feature without city or state: %s", feature.get("id"))
                continue

            key = (location.city, location.state)
            if key in seen:
                continue
            seen.add(key)

            if location.distance <= radius_miles:
                locations.append(location)

        locations.sort(key=lambda item: item.distance)
        logger.info(
            "Found %d locations within %s miles of (%.4f, %.4f)",
            len(locations),
            radius_miles,
            center.latitude,
            center.longitude,
        )
        return locations
