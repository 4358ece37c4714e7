"""Search -> details -> AI enrichment pipeline for a single request."""

from __future__ import annotations

import logging
from typing import List, Optional

from localbiz_scout.core.config import Settings
from localbiz_scout.core.enrichment import TextModel, discover_socials, discover_websites
from localbiz_scout.etl.transform import to_business_record
from localbiz_scout.models import BusinessRecord, SearchRequest
from localbiz_scout.vendors.gemini import GeminiClient
from localbiz_scout.vendors.google_places import GooglePlacesClient, GooglePlacesError

logger = logging.getLogger(__name__)


def find_businesses(client: GooglePlacesClient, request: SearchRequest) -> List[BusinessRecord]:
    """Run the text search and turn each retained candidate into a record.

    A failing text search raises :class:`GooglePlacesError`; a failing details
    call only drops that one candidate.
    """
    logger.info("Running Places text search for query=%s", request.query)
    response = client.text_search(request.query)
    candidates = response.get("results", [])[: request.limit]
    logger.info("Fetched %d candidates (limit=%d)", len(candidates), request.limit)

    records: List[BusinessRecord] = []
    for candidate in candidates:
        place_id = candidate.get("place_id")
        if not place_id:
            logger.debug("Skipping result without place_id: %s", candidate)
            continue

        try:
            details = client.place_details(place_id)
        except GooglePlacesError as exc:
            logger.warning("Failed to fetch details for %s: %s", place_id, exc)
            continue

        records.append(to_business_record(candidate, details, request.category))
    return records


class EnrichmentPipeline:
    def __init__(
        self,
        settings: Settings,
        places_client: Optional[GooglePlacesClient] = None,
        model_client: Optional[TextModel] = None,
    ) -> None:
        self.settings = settings
        self.places_client = places_client
        self.model_client = model_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "EnrichmentPipeline":
        places_client = None
        if settings.places_enabled:
            places_client = GooglePlacesClient(settings.google_maps_api_key, timeout=settings.places_timeout)

        model_client = None
        if settings.ai_enabled:
            try:
                model_client = GeminiClient(
                    settings.gemini_api_key,
                    model=settings.gemini_model,
                    temperature=settings.gemini_temperature,
                    timeout=settings.gemini_timeout,
                )
            except Exception as exc:  # noqa: BLE001
                logger.warning("Gemini client unavailable, AI enrichment disabled: %s", exc)
        return cls(settings, places_client=places_client, model_client=model_client)

    @property
    def ai_status(self) -> str:
        return "enabled" if self.model_client is not None else "disabled"

    def run(self, request: SearchRequest) -> List[BusinessRecord]:
        self.settings.require_places()
        if self.places_client is None:
            self.places_client = GooglePlacesClient(
                self.settings.google_maps_api_key, timeout=self.settings.places_timeout
            )

        records = find_businesses(self.places_client, request)
        logger.info("Places returned %d businesses for query=%s", len(records), request.query)

        if self.model_client is None:
            logger.info("AI enrichment skipped: GOOGLE_GEMINI_API_KEY not configured")
            return records

        if self.settings.ai_website_discovery:
            stats = discover_websites(records, self.model_client, request.location)
            logger.info(
                "Website discovery: attempted=%d updated=%d failed=%d",
                stats.attempted,
                stats.updated,
                stats.failed,
            )
        else:
            logger.info("Website discovery disabled by AI_WEBSITE_DISCOVERY")

        if self.settings.ai_social_discovery:
            stats = discover_socials(records, self.model_client)
            logger.info(
                "Social discovery: attempted=%d updated=%d failed=%d",
                stats.attempted,
                stats.updated,
                stats.failed,
            )
        else:
            logger.info("Social discovery disabled by AI_SOCIAL_DISCOVERY")

        return records
