"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    mapbox_api_key: str
    openai_api_key: str
    database_url: str
    openai_model: str = "gpt-4"
    worker_port: int = 9000
    geocoder_min_interval_ms: int = 100
    request_timeout: int = 10
    default_radius_miles: int = 25
    default_max_pages: int = 10
    output_dir: str = "generated"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    mapbox_api_key = os.getenv("MAPBOX_API_KEY", "")
    openai_api_key = os.getenv("OPENAI_API_KEY", "")
    database_url = os.getenv("DATABASE_URL", "")
    openai_model = os.getenv("OPENAI_MODEL", "gpt-4")
    worker_port = int(os.getenv("WORKER_PORT", "9000"))
    geocoder_min_interval_ms = int(os.getenv("GEOCODER_MIN_INTERVAL_MS", "100"))
    request_timeout = int(os.getenv("REQUEST_TIMEOUT", "10"))
    default_radius_miles = int(os.getenv("DEFAULT_RADIUS_MILES", "25"))
    default_max_pages = int(os.getenv("DEFAULT_MAX_PAGES", "10"))
    output_dir = os.getenv("OUTPUT_DIR", "generated")

    if not mapbox_api_key:
        logger.warning("MAPBOX_API_KEY is not configured; geocoding requests will fail.")
    if not openai_api_key:
        logger.warning("OPENAI_API_KEY is not configured; default business content will be used.")
    if not database_url:
        logger.warning("DATABASE_URL is not set; generated pages cannot be saved.")

    return Settings(
        mapbox_api_key=mapbox_api_key,
        openai_api_key=openai_api_key,
        database_url=database_url,
        openai_model=openai_model,
        worker_port=worker_port,
        geocoder_min_interval_ms=geocoder_min_interval_ms,
        request_timeout=request_timeout,
        default_radius_miles=default_radius_miles,
        default_max_pages=default_max_pages,
        output_dir=output_dir,
    )
