"""Business copy generation through the OpenAI chat completions API."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import openai

from landing_pages.core.errors import ContentGenerationError
from landing_pages.models import BusinessContent, GeneratedContent, SeoMetadata
from landing_pages.render.seo import generate_meta_description
from landing_pages.vendors.site_snapshot import SiteSnapshot, fetch_site_snapshot

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4"
DEFAULT_KEYWORD = "Vitrectomy Recovery Equipment Rental"
DEFAULT_BUSINESS = BusinessContent(
    description=(
        "Premier medical equipment rental service specializing in vitrectomy recovery equipment. "
        "We provide high-quality, sanitized medical equipment delivered right to your door, "
        "ensuring comfort and proper healing during your recovery period."
    ),
    services=(
        "Vitrectomy Recovery Chair Rental\n"
        "Face-Down Support Cushions & Pillows\n"
        "Adjustable Face-Down Mirrors\n"
        "Complete Recovery Kits\n"
        "Delivery & Setup Support\n"
        "Nationwide Rental Service"
    ),
    target_audience=(
        "Post-surgery patients, particularly those recovering from eye surgery, and their caregivers. "
        "Healthcare facilities and medical professionals seeking reliable equipment rental solutions "
        "for their patients."
    ),
    unique_value=(
        "24/7 delivery and support with expertly sanitized medical equipment. We ensure your recovery "
        "is comfortable and effective with premium equipment and professional setup."
    ),
    core_values=(
        "Patient Comfort First\n"
        "Medical-Grade Sanitization\n"
        "24/7 Professional Support\n"
        "Reliable & Timely Service\n"
        "Compassionate Care\n"
        "Quality Equipment Guaranteed"
    ),
)
DEFAULT_SUGGESTED_LOCATIONS: Tuple[Tuple[str, str], ...] = (
    ("New York", "NY"),
    ("Los Angeles", "CA"),
    ("Chicago", "IL"),
)
DEFAULT_CONTENT = GeneratedContent(
    business=DEFAULT_BUSINESS,
    keyword=DEFAULT_KEYWORD,
    suggested_locations=DEFAULT_SUGGESTED_LOCATIONS,
    from_fallback=True,
)
DEFAULT_SEO_KEYWORDS = ("medical equipment rental", "vitrectomy recovery", "medical supplies")

CONTENT_SYSTEM_PROMPT = (
    "You are an expert content strategist and copywriter specializing in medical equipment rental services. "
    "Your writing style is professional, empathetic, and focused on patient care and recovery."
)
CONTENT_USER_PROMPT = """Analyze the medical equipment rental website {url} and generate optimized business content. Include:
1. A compelling business description (3-4 sentences) focused on vitrectomy recovery equipment
2. 5-7 key medical equipment rental services (one per line)
3. Target audience description focusing on post-surgery patients and healthcare providers
4. Unique value proposition emphasizing equipment quality and patient support
5. 5-7 core values centered on patient care and medical standards
6. Primary keyword for medical equipment rental SEO
7. Suggest 3 major medical hub locations

Format the response as JSON with keys: description, services, targetAudience, uniqueValue, coreValues, keyword, suggestedLocations"""


def _as_lines(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "\n".join(str(item).strip() for item in value if str(item).strip())
    return str(value or "").strip()


def _parse_locations(value: Any) -> Tuple[Tuple[str, str], ...]:
    locations: List[Tuple[str, str]] = []
    for item in value or []:
        if isinstance(item, dict) and item.get("city") and item.get("state"):
            locations.append((str(item["city"]), str(item["state"])))
    return tuple(locations)


def merge_with_defaults(payload: Dict[str, Any]) -> GeneratedContent:
    """Fill any missing or empty field from the default bundle."""
    business = BusinessContent(
        description=_as_lines(payload.get("description")) or DEFAULT_BUSINESS.description,
        services=_as_lines(payload.get("services")) or DEFAULT_BUSINESS.services,
        target_audience=_as_lines(payload.get("targetAudience")) or DEFAULT_BUSINESS.target_audience,
        unique_value=_as_lines(payload.get("uniqueValue")) or DEFAULT_BUSINESS.unique_value,
        core_values=_as_lines(payload.get("coreValues")) or DEFAULT_BUSINESS.core_values,
    )
    return GeneratedContent(
        business=business,
        keyword=_as_lines(payload.get("keyword")) or DEFAULT_KEYWORD,
        suggested_locations=_parse_locations(payload.get("suggestedLocations")) or DEFAULT_SUGGESTED_LOCATIONS,
    )


class ContentComposer:
    """Generate landing page copy, falling back to fixed content on any failure."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: str = DEFAULT_MODEL,
        client: Any = None,
        snapshotter: Optional[Callable[[str], Optional[SiteSnapshot]]] = fetch_site_snapshot,
    ) -> None:
        self.model = model
        self.snapshotter = snapshotter
        self._client = client
        if self._client is None and api_key:
            self._client = openai.OpenAI(api_key=api_key)
            logger.info("OpenAI client initialized")
        elif self._client is None:
            logger.info("OpenAI client not configured; default business content will be used")

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _complete(self, system: str, prompt: str, **options: Any) -> str:
        if self._client is None:
            raise ContentGenerationError("OpenAI client is not configured")
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                **options,
            )
        except openai.OpenAIError as exc:
            raise ContentGenerationError(f"OpenAI request failed: {exc}") from exc
        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError) as exc:
            raise ContentGenerationError("OpenAI response had no message content") from exc

    def _complete_json(self, system: str, prompt: str, **options: Any) -> Any:
        content = self._complete(system, prompt, **options)
        try:
            return json.loads(content or "{}")
        except json.JSONDecodeError as exc:
            raise ContentGenerationError("OpenAI response was not valid JSON") from exc

    def _snapshot_prompt(self, url: str) -> str:
        if self.snapshotter is None:
            return ""
        try:
            snapshot = self.snapshotter(url)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to read homepage for %s: %s", url, exc)
            return ""
        return f"\n\nWhat the homepage currently says:\n{snapshot.as_prompt()}" if snapshot else ""

    def generate_business_content(self, url: str) -> GeneratedContent:
        prompt = CONTENT_USER_PROMPT.format(url=url) + self._snapshot_prompt(url)
        try:
            payload = self._complete_json(
                CONTENT_SYSTEM_PROMPT,
                prompt,
                temperature=0.7,
                max_tokens=1500,
                presence_penalty=0.3,
                frequency_penalty=0.3,
            )
        except ContentGenerationError as exc:
            logger.warning("Using default business content for %s: %s", url, exc)
            return DEFAULT_CONTENT
        if not isinstance(payload, dict):
            logger.warning("Unexpected OpenAI payload for %s; using default business content", url)
            return DEFAULT_CONTENT
        return merge_with_defaults(payload)

    def generate_seo_metadata(
        self,
        title: str,
        description: str,
        *,
        fallback: Optional[SeoMetadata] = None,
    ) -> SeoMetadata:
        """Ask for meta title, description and keywords; any missing part comes from ``fallback``."""
        if fallback is None:
            fallback = SeoMetadata(meta_title=title, meta_description=description[:155], keywords=DEFAULT_SEO_KEYWORDS)
        if not self.configured:
            return fallback
        prompt = (
            "Generate SEO metadata for a medical equipment rental landing page with:\n"
            f"Title: {title}\nDescription: {description}\n\n"
            "Include:\n1. SEO-optimized meta title (max 60 chars)\n"
            "2. Compelling meta description (max 155 chars)\n"
            "3. 5-7 relevant medical equipment keywords\n\n"
            "Format as JSON with keys: metaTitle, metaDescription, keywords"
        )
        try:
            payload = self._complete_json(
                "You are an SEO expert specializing in medical equipment rental services.",
                prompt,
                temperature=0.5,
                max_tokens=500,
            )
        except ContentGenerationError as exc:
            logger.warning("Using default SEO metadata for %r: %s", title, exc)
            return fallback
        if not isinstance(payload, dict):
            return fallback
        keywords = payload.get("keywords")
        description = str(payload.get("metaDescription") or fallback.meta_description)
        return SeoMetadata(
            meta_title=str(payload.get("metaTitle") or fallback.meta_title),
            meta_description=generate_meta_description(description),
            keywords=tuple(str(k) for k in keywords) if isinstance(keywords, list) and keywords else fallback.keywords,
        )

    def format_city_name(self, city: str, state: str) -> Tuple[str, str]:
        """Normalise a city/state pair to USPS style; returns the input on failure."""
        if not self.configured:
            return city, state
        prompt = (
            "Format this city name and state according to official standards:\n"
            f"City: {city}\nState: {state}\n\n"
            "Return as JSON with proper capitalization and formatting.\n"
            'Example: {"city": "New York", "state": "NY"}'
        )
        try:
            payload = self._complete_json(
                "You are a location data specialist. Format city names according to official USPS standards.",
                prompt,
                temperature=0,
                max_tokens=100,
            )
        except ContentGenerationError as exc:
            logger.error("Error formatting city name: %s", exc)
            return city, state
        if not isinstance(payload, dict):
            return city, state
        return str(payload.get("city") or city), str(payload.get("state") or state)

    def validate_location(self, city: str, state: str) -> bool:
        """Ask whether the city exists in the state; True when unsure so the flow is not blocked."""
        if not self.configured:
            return True
        prompt = (
            "Verify if this city exists in the given state:\n"
            f"City: {city}\nState: {state}\n\n"
            "Return only true or false as a JSON boolean."
        )
        try:
            payload = self._complete_json(
                "You are a location data validator. Verify if a city exists in the given US state.",
                prompt,
                temperature=0,
                max_tokens=50,
            )
        except ContentGenerationError as exc:
            logger.error("Error validating location: %s", exc)
            return True
        return payload if isinstance(payload, bool) else True
