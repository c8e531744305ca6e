"""URL slug and meta tag helpers for generated location pages."""

import re
from typing import Iterable, List

from landing_pages.core.errors import InvalidDomainError

META_DESCRIPTION_LIMIT = 155
_ELLIPSIS = "..."

_PREFIX_RE = re.compile(r"^(https?://)?(www\.)?")
_DOMAIN_RE = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(?:\.[a-zA-Z]{2,})+$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def is_valid_domain(domain: str) -> bool:
    return bool(_DOMAIN_RE.fullmatch(_PREFIX_RE.sub("", domain or "", count=1)))


def clean_domain(url: str) -> str:
    """Strip scheme and ``www.``, lowercase, trim and drop one trailing slash."""
    cleaned = _PREFIX_RE.sub("", (url or "").strip().lower(), count=1)
    if cleaned.endswith("/"):
        cleaned = cleaned[:-1]
    return cleaned


def slugify(text: str) -> str:
    return _NON_ALNUM_RE.sub("-", (text or "").lower()).strip("-")


def generate_seo_url(domain: str, keyword: str, city: str, state: str) -> str:
    cleaned = clean_domain(domain)
    if not is_valid_domain(cleaned):
        raise InvalidDomainError(f"Invalid domain format: {domain!r}")
    return f"{cleaned}/locations/{slugify(city)}-{slugify(state)}/{slugify(keyword)}"


def generate_meta_title(keyword: str, city: str, state: str, suffix: str = "Professional Services") -> str:
    return f"{keyword} in {city}, {state} | {suffix}"


def generate_meta_description(description: str) -> str:
    """Cut descriptions longer than 155 characters to 152 plus an ellipsis.

    The cut is a hard character cut and may split a word.
    """
    if len(description) > META_DESCRIPTION_LIMIT:
        return description[: META_DESCRIPTION_LIMIT - len(_ELLIPSIS)] + _ELLIPSIS
    return description


def extract_keywords(
    keyword: str,
    city: str,
    state: str,
    services: str = "",
    extra: Iterable[str] = (),
) -> List[str]:
    """Ordered, de-duplicated keyword list for a location page."""
    candidates = [
        keyword,
        f"{keyword} {city}",
        f"{keyword} {state}",
        f"{keyword} near me",
        *extra,
        *(service.strip() for service in (services or "").split("\n")),
    ]
    keywords: List[str] = []
    for candidate in candidates:
        if candidate and candidate not in keywords:
            keywords.append(candidate)
    return keywords
