"""Database helpers for saving generated landing pages."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from psycopg2 import extras, pool

from landing_pages.core.config import get_settings
from landing_pages.models import GenerationRequest, PagePreview

logger = logging.getLogger(__name__)

_connection_pool: Optional[pool.SimpleConnectionPool] = None


def init_pool(minconn: int = 1, maxconn: int = 5) -> pool.SimpleConnectionPool:
    """Initialise and return the shared connection pool."""
    global _connection_pool
    if _connection_pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is required for database connections")
        _connection_pool = pool.SimpleConnectionPool(
            minconn,
            maxconn,
            dsn=settings.database_url,
            connect_timeout=10,
        )
        logger.info("Database connection pool initialised")
    return _connection_pool


@contextmanager
def get_connection():
    """Context manager yielding a pooled connection."""
    pg_pool = init_pool()
    conn = pg_pool.getconn()
    try:
        yield conn
    finally:
        pg_pool.putconn(conn)


_INSERT_SAVED_PAGE = """
INSERT INTO saved_pages (
    user_id,
    form_data,
    previews,
    created_at
) VALUES (
    %(user_id)s,
    %(form_data)s,
    %(previews)s,
    NOW()
)
RETURNING id;
"""

_LIST_SAVED_PAGES = """
SELECT id, user_id, form_data, previews, created_at
FROM saved_pages
WHERE (%(user_id)s IS NULL OR user_id = %(user_id)s)
ORDER BY created_at DESC
LIMIT %(limit)s;
"""

_DELETE_SAVED_PAGE = "DELETE FROM saved_pages WHERE id = %(id)s;"


def _prepare_params(
    request: GenerationRequest,
    previews: Iterable[PagePreview],
    user_id: Optional[str],
) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "form_data": extras.Json(request.to_dict()),
        "previews": extras.Json([preview.to_dict() for preview in previews]),
    }


def save_generation(
    request: GenerationRequest,
    previews: List[PagePreview],
    user_id: Optional[str] = None,
) -> str:
    """Persist a request with its previews and return the new row id."""
    if not previews:
        raise ValueError("at least one preview is required to save a generation")
    params = _prepare_params(request, previews, user_id)

    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_INSERT_SAVED_PAGE, params)
            row = cur.fetchone()
        conn.commit()
    saved_id = str(row[0])
    logger.info("Saved %d previews for %s as %s", len(previews), request.domain, saved_id)
    return saved_id


def list_generations(user_id: Optional[str] = None, limit: int = 20) -> List[Dict[str, Any]]:
    with get_connection() as conn:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.execute(_LIST_SAVED_PAGES, {"user_id": user_id, "limit": limit})
            rows = cur.fetchall()
    return [dict(row) for row in rows]


def delete_generation(saved_id: str) -> bool:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_DELETE_SAVED_PAGE, {"id": saved_id})
            deleted = cur.rowcount > 0
        conn.commit()
    logger.debug("Deleted saved page %s: %s", saved_id, deleted)
    return deleted
