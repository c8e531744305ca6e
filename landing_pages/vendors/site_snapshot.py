"""Fetch a short homepage snapshot used to ground generated business copy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from textwrap import shorten
from typing import Optional, Tuple
from urllib.parse import urlsplit

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

USER_AGENT = "LandingPageGeneratorBot/1.0"
REQUEST_TIMEOUT = 10
_SESSION = requests.Session()
_SESSION.headers.setdefault("User-Agent", USER_AGENT)
_SESSION.headers.setdefault("Accept", "text/html,application/xhtml+xml")


@dataclass(frozen=True, slots=True)
class SiteSnapshot:
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None

    def as_prompt(self) -> str:
        lines = [f"Homepage: {self.url}"]
        if self.title:
            lines.append(f"Title: {self.title}")
        if self.description:
            lines.append(f"Meta description: {self.description}")
        if self.summary:
            lines.append(f"Visible text: {self.summary}")
        return "\n".join(lines)


def homepage_url(website: str) -> Optional[str]:
    """Root URL of a bare domain or full URL; path, query and fragment are dropped."""
    candidate = (website or "").strip()
    if not candidate:
        return None
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    parts = urlsplit(candidate)
    if not parts.hostname:
        return None
    return f"{parts.scheme}://{parts.netloc}/"


def fetch_url(url: str, *, timeout: int = REQUEST_TIMEOUT) -> Optional[Tuple[str, BeautifulSoup]]:
    """Fetch a URL and return the final URL + soup when it is HTML content."""
    try:
        response = _SESSION.get(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
        return None
    if response.status_code >= 400:
        logger.warning("Fetching %s returned HTTP %s", url, response.status_code)
        return None
    content_type = response.headers.get("Content-Type", "").lower()
    if "text/html" not in content_type:
        logger.debug("Skipping non-HTML content at %s (content-type=%s)", url, content_type)
        return None
    return response.url, BeautifulSoup(response.text, "html.parser")


def summarize(text: str, *, width: int = 320) -> Optional[str]:
    return shorten(text or "", width=width, placeholder="...") or None


def parse_snapshot(url: str, soup: BeautifulSoup) -> SiteSnapshot:
    title = soup.title.get_text(" ", strip=True) if soup.title else None
    meta = soup.find("meta", attrs={"name": "description"})
    description = meta.get("content", "").strip() if meta else ""

    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    body = soup.body or soup
    return SiteSnapshot(
        url=url,
        title=title or None,
        description=description or None,
        summary=summarize(body.get_text(" ", strip=True)),
    )


def fetch_site_snapshot(website: str, *, timeout: int = REQUEST_TIMEOUT) -> Optional[SiteSnapshot]:
    """Return the homepage snapshot, or None when the site cannot be read."""
    url = homepage_url(website)
    if not url:
        return None
    fetched = fetch_url(url, timeout=timeout)
    if fetched is None:
        return None
    final_url, soup = fetched
    return parse_snapshot(final_url, soup)
