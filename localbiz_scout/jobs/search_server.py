"""HTTP entrypoint serving business searches to the frontend."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from localbiz_scout.core.config import ConfigError, Settings, get_settings
from localbiz_scout.core.pipeline import EnrichmentPipeline
from localbiz_scout.etl.export import export_filename, split_by_website, to_csv
from localbiz_scout.models import BusinessRecord, SearchRequest, SearchValidationError
from localbiz_scout.vendors.google_places import GooglePlacesError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

PipelineFactory = Callable[[Settings], EnrichmentPipeline]


def create_app(settings: Optional[Settings] = None, pipeline_factory: Optional[PipelineFactory] = None) -> Flask:
    """Build the Flask app around one settings object shared by every request."""
    settings = settings or get_settings()
    pipeline_factory = pipeline_factory or EnrichmentPipeline.from_settings

    app = Flask(__name__)
    CORS(app, origins=[origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()] or "*")

    def _search() -> Tuple[Optional[List[BusinessRecord]], Optional[EnrichmentPipeline], Optional[Tuple[Any, int]]]:
        try:
            search = SearchRequest.from_params(
                request.args.get("location"),
                request.args.get("category"),
                request.args.get("limit"),
            )
        except SearchValidationError as exc:
            return None, None, (jsonify({"error": str(exc)}), 400)

        pipeline = pipeline_factory(settings)
        try:
            records = pipeline.run(search)
        except ConfigError as exc:
            logger.error("Search rejected: %s", exc)
            return None, pipeline, (jsonify({"error": str(exc)}), 500)
        except GooglePlacesError as exc:
            logger.error("Places text search error: status=%s", exc.status)
            return None, pipeline, (jsonify({"error": "Google Places text search failed", "details": exc.payload}), 502)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Search failed: %s", exc)
            return None, pipeline, (jsonify({"error": "Internal server error"}), 500)
        return records, pipeline, None

    # ---------- Routes ----------

    @app.get("/")
    def root() -> Any:
        """Simple root to avoid 404 on GET /"""
        return "ok", 200

    @app.get("/healthz")
    @app.get("/api/health")
    def healthcheck() -> Any:
        return (
            jsonify(
                {
                    "status": "ok",
                    "places_enabled": settings.places_enabled,
                    "ai_enabled": settings.ai_enabled,
                }
            ),
            200,
        )

    @app.get("/api/businesses")
    def search_businesses() -> Any:
        """Search businesses by location and category.

        Query params: location, category (required), limit (optional, default 10).
        """
        records, pipeline, error = _search()
        if error is not None:
            return error

        response = jsonify([record.to_dict() for record in records])
        response.headers["X-AI-Enrichment"] = pipeline.ai_status
        return response, 200

    @app.get("/api/businesses/export.csv")
    def export_businesses() -> Any:
        records, pipeline, error = _search()
        if error is not None:
            return error

        with_website, without_website = split_by_website(records)
        response = Response(to_csv(with_website, without_website), mimetype="text/csv")
        response.headers["Content-Disposition"] = f'attachment; filename="{export_filename()}"'
        response.headers["X-AI-Enrichment"] = pipeline.ai_status
        return response

    return app


def main() -> None:
    settings = get_settings()
    logger.info("[BOOT] Binding on 0.0.0.0:%d", settings.port)
    app = create_app(settings)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
