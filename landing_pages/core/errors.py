"""Error types raised by the landing page pipeline."""

from typing import Optional


class PageGeneratorError(Exception):
    """Base class for pipeline errors surfaced to end users."""


class InvalidInputError(PageGeneratorError, ValueError):
    """Raised when a request parameter is out of range or malformed."""


class InvalidDomainError(InvalidInputError):
    """Raised when a domain does not look like a hostname."""


class LocationResolutionError(PageGeneratorError, RuntimeError):
    """Raised when the geocoding provider cannot answer a location query."""

    reason = "failed"

    def __init__(self, message: str, *, city: Optional[str] = None, state: Optional[str] = None) -> None:
        super().__init__(message)
        self.city = city
        self.state = state


class NotFoundError(LocationResolutionError):
    reason = "not_found"


class RateLimitError(LocationResolutionError):
    reason = "rate_limited"


class NetworkError(LocationResolutionError):
    reason = "network"


class NoLocationsFoundError(PageGeneratorError):
    """Raised by the orchestrator when nothing survives the radius filter."""

    def __init__(self, city: str, state: str, radius_miles: float) -> None:
        super().__init__(
            f"No locations found within {radius_miles:g} miles of {city}, {state}. Try increasing the radius."
        )
        self.city = city
        self.state = state
        self.radius_miles = radius_miles


class ContentGenerationError(PageGeneratorError):
    """Raised inside the content composer; always recovered with default content."""
