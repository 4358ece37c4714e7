"""Utilities for transforming Google Places responses into business records."""

import logging
from typing import Any, Dict, Optional

from localbiz_scout.models import (
    DEFAULT_ADDRESS,
    DEFAULT_NAME,
    DEFAULT_PHONE,
    PLACES_NOTE,
    BusinessRecord,
    is_http_url,
)

logger = logging.getLogger(__name__)


def _first_text(*values: Any) -> Optional[str]:
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def to_business_record(candidate: Dict[str, Any], details: Dict[str, Any], category: str) -> BusinessRecord:
    """Merge a details result over its text-search candidate, falling back to defaults."""
    details = details or {}
    website = _first_text(details.get("website"))
    if website and not is_http_url(website):
        logger.debug("Dropping non-http website for %s: %s", candidate.get("place_id"), website)
        website = None

    return BusinessRecord(
        id=candidate["place_id"],
        name=_first_text(details.get("name"), candidate.get("name")) or DEFAULT_NAME,
        category=category,
        address=_first_text(details.get("formatted_address"), candidate.get("formatted_address")) or DEFAULT_ADDRESS,
        phone=_first_text(details.get("formatted_phone_number")) or DEFAULT_PHONE,
        website=website,
        socials=[],
        verification_notes=PLACES_NOTE,
    )
