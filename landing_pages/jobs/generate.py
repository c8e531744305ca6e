"""CLI job that generates location landing pages for a domain."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Set

from landing_pages.core import db
from landing_pages.core.config import Settings, get_settings
from landing_pages.core.errors import (
    InvalidInputError,
    LocationResolutionError,
    NoLocationsFoundError,
    NotFoundError,
)
from landing_pages.core.location_service import GeoResolver, NearbyLocationFinder
from landing_pages.models import (
    DEFAULT_IMAGES,
    DEFAULT_LOGO_URL,
    GeneratedContent,
    GenerationRequest,
    GenerationResult,
    Location,
    PagePreview,
    SeoMetadata,
)
from landing_pages.render.page import generate_manifest, render_landing_page
from landing_pages.render.seo import (
    clean_domain,
    extract_keywords,
    generate_meta_description,
    generate_meta_title,
    generate_seo_url,
    slugify,
)
from landing_pages.vendors.openai_content import ContentComposer

logger = logging.getLogger(__name__)


def build_preview(
    domain: str,
    keyword: str,
    location: Location,
    content: GeneratedContent,
    composer: ContentComposer,
) -> PagePreview:
    title = f"{keyword} in {location.city}, {location.state}"
    business = content.business
    defaults = SeoMetadata(
        meta_title=generate_meta_title(keyword, location.city, location.state),
        meta_description=generate_meta_description(business.description),
        keywords=tuple(extract_keywords(keyword, location.city, location.state, business.services)),
    )
    return PagePreview(
        title=title,
        url=generate_seo_url(domain, keyword, location.city, location.state),
        location=location,
        business=business,
        images=DEFAULT_IMAGES,
        logo_url=DEFAULT_LOGO_URL,
        seo=composer.generate_seo_metadata(title, business.description, fallback=defaults),
    )


def run_generation(
    request: GenerationRequest,
    *,
    resolver: GeoResolver,
    finder: NearbyLocationFinder,
    composer: ContentComposer,
) -> GenerationResult:
    """Resolve, expand, compose and render pages for one request. No retries.

    Locations whose slug collides with an earlier page (``St. Louis`` and
    ``St Louis``) are skipped so every page keeps a distinct URL and file.
    """
    request.validate()
    domain = clean_domain(request.domain)

    city, state = composer.format_city_name(request.city, request.state)
    if not composer.validate_location(city, state):
        raise NotFoundError(f"Location not found for {city}, {state}", city=city, state=state)

    center = resolver.resolve(city, state)
    locations = finder.find(center, request.radius_miles)
    if not locations:
        raise NoLocationsFoundError(city, state, request.radius_miles)

    content = composer.generate_business_content(domain)
    keyword = request.keyword or content.keyword

    previews: List[PagePreview] = []
    pages = []
    seen_urls: Set[str] = set()
    for location in locations:
        if len(previews) >= request.max_pages:
            break
        url = generate_seo_url(domain, keyword, location.city, location.state)
        if url in seen_urls:
            logger.info("Skipping %s, %s: page %s already generated", location.city, location.state, url)
            continue
        seen_urls.add(url)
        preview = build_preview(domain, keyword, location, content, composer)
        previews.append(preview)
        pages.append((preview, render_landing_page(preview, request)))

    logger.info(
        "Generated %d pages for %s around %s, %s (%d locations in range)",
        len(pages),
        domain,
        city,
        state,
        len(locations),
    )
    return GenerationResult(
        request=request,
        content=content,
        previews=previews,
        pages=pages,
        manifest=generate_manifest(previews),
    )


def build_services(settings: Settings):
    """Wire the pipeline collaborators from settings."""
    resolver = GeoResolver(settings.mapbox_api_key, timeout=settings.request_timeout)
    finder = NearbyLocationFinder(settings.mapbox_api_key, throttle=resolver.throttle, timeout=settings.request_timeout)
    composer = ContentComposer(settings.openai_api_key, model=settings.openai_model)
    return resolver, finder, composer


def write_pages(result: GenerationResult, output_dir: Path) -> List[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for preview, html in result.pages:
        location = preview.location
        path = output_dir / f"{slugify(location.city)}-{slugify(location.state)}.html"
        path.write_text(html, encoding="utf-8")
        written.append(path)
    manifest_path = output_dir / "manifest.json"
    manifest_path.write_text(result.manifest, encoding="utf-8")
    written.append(manifest_path)
    return written


def build_parser(settings: Optional[Settings] = None) -> argparse.ArgumentParser:
    settings = settings or get_settings()
    parser = argparse.ArgumentParser(description="Generate location landing pages")
    parser.add_argument("--domain", required=True, help="Business website domain, e.g. example.com")
    parser.add_argument("--city", required=True, help="Seed city")
    parser.add_argument("--state", required=True, help="Seed state (two-letter code)")
    parser.add_argument(
        "--radius",
        dest="radius_miles",
        type=float,
        default=settings.default_radius_miles,
        help="Search radius in miles (1-100)",
    )
    parser.add_argument(
        "--max-pages",
        dest="max_pages",
        type=int,
        default=settings.default_max_pages,
        help="Number of location pages to generate (1-50)",
    )
    parser.add_argument("--keyword", help="Primary keyword; generated when omitted")
    parser.add_argument("--output-dir", dest="output_dir", default=settings.output_dir, help="Where to write HTML files")
    parser.add_argument("--save", action="store_true", help="Persist the generation to the database")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    request = GenerationRequest(
        domain=args.domain,
        city=args.city,
        state=args.state,
        radius_miles=args.radius_miles,
        max_pages=args.max_pages,
        keyword=args.keyword,
    )
    resolver, finder, composer = build_services(settings)

    try:
        result = run_generation(request, resolver=resolver, finder=finder, composer=composer)
    except InvalidInputError as exc:
        logger.error("Invalid input: %s", exc)
        return 2
    except NoLocationsFoundError as exc:
        logger.warning("%s", exc)
        return 3
    except LocationResolutionError as exc:
        logger.error("Location lookup failed: %s", exc)
        return 1

    for path in write_pages(result, Path(args.output_dir)):
        logger.info("Wrote %s", path)

    if args.save:
        try:
            saved_id = db.save_generation(request, result.previews)
            logger.info("Saved generation %s", saved_id)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to save generation: %s", exc)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
