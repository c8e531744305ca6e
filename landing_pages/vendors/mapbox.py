"""Client utilities for the Mapbox geocoding places API."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places"
DEFAULT_TIMEOUT = 10


class MapboxError(RuntimeError):
    """Raised when the geocoding API returns a non-successful response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def search_places(
    query: str,
    api_key: str,
    *,
    limit: int,
    bbox: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """Run a US ``place`` search and return the raw feature collection.

    ``query`` is either free text ("Austin, TX, United States") or a
    "lon,lat" pair. Transport errors from requests propagate unchanged.
    """
    params: Dict[str, Any] = {
        "access_token": api_key,
        "types": "place",
        "country": "US",
        "limit": limit,
    }
    if bbox:
        params["bbox"] = bbox
    response = _SESSION.get(f"{_BASE_URL}/{quote(query, safe=',')}.json", params=params, timeout=timeout)
    if response.status_code >= 400:
        message = _error_message(response)
        logger.error("search_places failed: status=%s, message=%s", response.status_code, message)
        raise MapboxError(message, status_code=response.status_code)
    payload = response.json()
    if not isinstance(payload.get("features"), list):
        payload["features"] = []
    return payload


def _error_message(response: Any) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
