"""Core data models shared by the landing page pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from landing_pages.core.errors import InvalidInputError
from landing_pages.render.seo import clean_domain, is_valid_domain

MIN_RADIUS_MILES = 1
MAX_RADIUS_MILES = 100
MIN_PAGES = 1
MAX_PAGES = 50


def _lines(value: str) -> List[str]:
    return [line.strip() for line in (value or "").split("\n") if line.strip()]


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Location:
    """A nearby city returned by the location finder."""

    city: str
    state: str
    latitude: float
    longitude: float
    distance: float
    population: Optional[int] = None


@dataclass(frozen=True, slots=True)
class BusinessContent:
    description: str
    services: str
    target_audience: str
    unique_value: str
    core_values: str

    def service_lines(self) -> List[str]:
        return _lines(self.services)

    def core_value_lines(self) -> List[str]:
        return _lines(self.core_values)

    def to_dict(self) -> Dict[str, str]:
        return {
            "description": self.description,
            "services": self.services,
            "targetAudience": self.target_audience,
            "uniqueValue": self.unique_value,
            "coreValues": self.core_values,
        }


@dataclass(frozen=True, slots=True)
class PageImages:
    hero: str
    feature1: str
    feature2: str
    feature3: str


DEFAULT_LOGO_URL = "https://images.unsplash.com/photo-1563986768609-322da13575f3?q=80&w=1000&auto=format&fit=crop"
DEFAULT_IMAGES = PageImages(
    hero="https://images.unsplash.com/photo-1497366216548-37526070297c?q=80&w=1000&auto=format&fit=crop",
    feature1="https://images.unsplash.com/photo-1497366811353-6870744d04b2?q=80&w=1000&auto=format&fit=crop",
    feature2="https://images.unsplash.com/photo-1497366754035-5f381699c2dd?q=80&w=1000&auto=format&fit=crop",
    feature3="https://images.unsplash.com/photo-1497366811353-6870744d04b2?q=80&w=1000&auto=format&fit=crop",
)


@dataclass(frozen=True, slots=True)
class SeoMetadata:
    meta_title: str
    meta_description: str
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PagePreview:
    """Everything needed to render one location landing page."""

    title: str
    url: str
    location: Location
    business: Optional[BusinessContent] = None
    images: Optional[PageImages] = None
    logo_url: Optional[str] = None
    seo: Optional[SeoMetadata] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "location": asdict(self.location),
        }
        if self.business is not None:
            payload["business"] = self.business.to_dict()
        if self.images is not None:
            payload["images"] = asdict(self.images)
        if self.logo_url is not None:
            payload["logoUrl"] = self.logo_url
        if self.seo is not None:
            payload["seo"] = {
                "metaTitle": self.seo.meta_title,
                "metaDescription": self.seo.meta_description,
                "keywords": list(self.seo.keywords),
            }
        return payload


@dataclass(frozen=True, slots=True)
class GeneratedContent:
    """Business copy produced by the content composer."""

    business: BusinessContent
    keyword: str
    suggested_locations: Tuple[Tuple[str, str], ...] = ()
    from_fallback: bool = False


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    domain: str
    city: str
    state: str
    radius_miles: float
    max_pages: int
    keyword: Optional[str] = None

    def validate(self) -> "GenerationRequest":
        """Raise InvalidInputError when any field is out of range."""
        if not self.domain or not self.domain.strip():
            raise InvalidInputError("Please enter a website URL")
        if not is_valid_domain(clean_domain(self.domain)):
            raise InvalidInputError("Please enter a valid domain (e.g., example.com)")
        if not self.city or not self.city.strip() or not self.state or not self.state.strip():
            raise InvalidInputError("city and state are required")
        if not MIN_RADIUS_MILES <= self.radius_miles <= MAX_RADIUS_MILES:
            raise InvalidInputError(f"radius must be between {MIN_RADIUS_MILES} and {MAX_RADIUS_MILES} miles")
        if not MIN_PAGES <= self.max_pages <= MAX_PAGES:
            raise InvalidInputError(f"max pages must be between {MIN_PAGES} and {MAX_PAGES}")
        return self

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        default_radius: float = 25,
        default_max_pages: int = 10,
    ) -> "GenerationRequest":
        """Build a request from a JSON body accepting camelCase or snake_case keys."""
        radius_raw = payload.get("radiusMiles", payload.get("radius_miles", default_radius))
        max_pages_raw = payload.get("maxPages", payload.get("max_pages", default_max_pages))
        try:
            radius = float(radius_raw)
        except (TypeError, ValueError):
            raise InvalidInputError("radiusMiles must be numeric") from None
        try:
            max_pages = int(max_pages_raw)
        except (TypeError, ValueError):
            raise InvalidInputError("maxPages must be numeric") from None

        keyword = str(payload.get("keyword") or "").strip()
        return cls(
            domain=str(payload.get("domain") or "").strip(),
            city=str(payload.get("city") or "").strip(),
            state=str(payload.get("state") or "").strip(),
            radius_miles=radius,
            max_pages=max_pages,
            keyword=keyword or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "city": self.city,
            "state": self.state,
            "radiusMiles": self.radius_miles,
            "maxPages": self.max_pages,
            "keyword": self.keyword,
        }


@dataclass(frozen=True, slots=True)
class GenerationResult:
    request: GenerationRequest
    content: GeneratedContent
    previews: List[PagePreview] = field(default_factory=list)
    pages: List[Tuple[PagePreview, str]] = field(default_factory=list)
    manifest: str = "[]"
