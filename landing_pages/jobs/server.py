"""HTTP entrypoint that runs landing page generation on request."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, Response, jsonify, request

from landing_pages.core import db
from landing_pages.core.config import get_settings
from landing_pages.core.errors import (
    InvalidInputError,
    LocationResolutionError,
    NoLocationsFoundError,
    NotFoundError,
    RateLimitError,
)
from landing_pages.jobs.generate import build_services, run_generation
from landing_pages.models import GenerationRequest, GenerationResult

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)
_services: Optional[Tuple[Any, Any, Any]] = None


def get_services() -> Tuple[Any, Any, Any]:
    """Lazily build (resolver, finder, composer) once per process."""
    global _services
    if _services is None:
        _services = build_services(get_settings())
    return _services


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "worker_port_config": settings.worker_port,
                "geocoder_configured": bool(settings.mapbox_api_key),
                "content_generator_configured": bool(settings.openai_api_key),
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.post("/generate")
def generate_pages() -> Any:
    """
    Generate location pages.
    Required JSON fields: domain, city, state
    Optional: radiusMiles, maxPages, keyword, include_html (bool), save (bool), user_id
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}

    required = ("domain", "city", "state")
    missing = [f for f in required if not payload.get(f)]
    if missing:
        return jsonify({"error": f"missing fields: {', '.join(missing)}"}), 400

    result, error = _run(payload)
    if error is not None:
        return error

    data: Dict[str, Any] = {
        "previews": [preview.to_dict() for preview in result.previews],
        "manifest": result.manifest,
        "content_from_fallback": result.content.from_fallback,
    }
    if payload.get("include_html"):
        data["pages"] = [{"url": preview.url, "html": html} for preview, html in result.pages]

    if payload.get("save"):
        try:
            data["saved_id"] = db.save_generation(result.request, result.previews, payload.get("user_id"))
            data["saved"] = True
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to save generation for %s: %s", result.request.domain, exc)
            data["saved"] = False

    return jsonify({"data": data}), 200


@app.get("/preview")
def preview_page() -> Any:
    """Render the nearest location page as HTML, driven by query parameters."""
    payload = {key: value for key, value in request.args.items()}
    payload["maxPages"] = 1
    result, error = _run(payload)
    if error is not None:
        return error
    _, html = result.pages[0]
    return Response(html, mimetype="text/html")


@app.get("/saved")
def list_saved() -> Any:
    """List saved generations, newest first. Optional query: user_id, limit (1-100)."""
    try:
        limit = int(request.args.get("limit", 20))
    except ValueError:
        return jsonify({"error": "limit must be numeric"}), 400
    if not 1 <= limit <= 100:
        return jsonify({"error": "limit must be between 1 and 100"}), 400

    try:
        rows = db.list_generations(request.args.get("user_id"), limit)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Listing saved generations failed: %s", exc)
        return jsonify({"error": "saved pages are unavailable"}), 503
    return jsonify({"data": rows}), 200


@app.delete("/saved/<saved_id>")
def delete_saved(saved_id: str) -> Any:
    try:
        deleted = db.delete_generation(saved_id)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Deleting saved generation %s failed: %s", saved_id, exc)
        return jsonify({"error": "saved pages are unavailable"}), 503
    if not deleted:
        return jsonify({"error": f"saved generation {saved_id} not found"}), 404
    return jsonify({"data": {"id": saved_id, "deleted": True}}), 200


# ---------- Internals ----------


def _run(payload: Dict[str, Any]) -> Tuple[Optional[GenerationResult], Optional[Tuple[Any, int]]]:
    settings = get_settings()
    try:
        generation_request = GenerationRequest.from_payload(
            payload,
            default_radius=settings.default_radius_miles,
            default_max_pages=settings.default_max_pages,
        )
        resolver, finder, composer = get_services()
        result = run_generation(generation_request, resolver=resolver, finder=finder, composer=composer)
    except InvalidInputError as exc:
        return None, (jsonify({"error": str(exc)}), 400)
    except NoLocationsFoundError as exc:
        return None, (jsonify({"error": str(exc), "reason": "no_locations"}), 422)
    except NotFoundError as exc:
        return None, (jsonify({"error": str(exc), "reason": exc.reason}), 404)
    except RateLimitError as exc:
        return None, (jsonify({"error": str(exc), "reason": exc.reason}), 429)
    except LocationResolutionError as exc:
        logger.warning("Location lookup failed: %s", exc)
        return None, (jsonify({"error": str(exc), "reason": exc.reason}), 502)
    return result, None


def main() -> None:
    port = int(os.getenv("PORT") or get_settings().worker_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
