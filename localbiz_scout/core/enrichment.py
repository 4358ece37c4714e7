"""Best-effort AI enrichment of business records.

Two passes run over the gateway output, one record at a time:

1. website discovery for records Google Places returned without a website;
2. social profile discovery for every record that has a website, including
   the ones upgraded by the first pass.

A failure on one record (model error, timeout, unparseable reply) is logged and
leaves that record exactly as it was; the rest of the batch carries on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from localbiz_scout.etl.model_output import extract_social_links, extract_website
from localbiz_scout.models import BusinessRecord

logger = logging.getLogger(__name__)

WEBSITE_NOTE = "Website inferred by Gemini (unverified, check manually)"
SOCIALS_NOTE = "Socials via Gemini"


class TextModel(Protocol):
    def generate_text(self, prompt: str) -> str:
        ...


@dataclass
class EnrichmentStats:
    attempted: int = 0
    updated: int = 0
    failed: int = 0


def build_website_prompt(record: BusinessRecord, location: str) -> str:
    return f"""You are helping verify local business listings. Find the official website of this business.

Business name: {record.name}
Category: {record.category}
Location: {location}

Rules:
- Only return a URL you are confident is the official website of this exact business.
- Do not return directory, review or social media pages (Yelp, Facebook, TripAdvisor, etc.).
- If you are not sure, return null. Do not guess.
- Respond with ONLY valid JSON of the form {{"website": "https://..."}} or {{"website": null}}, no comments, no extra text."""


def build_socials_prompt(website: str) -> str:
    return f"""You are given a business website URL. If you can confidently identify official social media profile URLs for this business (Facebook, Instagram, LinkedIn, X/Twitter, YouTube, TikTok), return them.

Rules:
- Only return links you are confident are official profiles for this same business.
- Do not guess or fabricate handles.
- If you are not sure, return an empty array.
- Respond with ONLY valid JSON: an array of URL strings, no comments, no extra text.

Website: {website}"""


def discover_websites(records: Sequence[BusinessRecord], model: TextModel, location: str) -> EnrichmentStats:
    stats = EnrichmentStats()
    for record in records:
        if record.website is not None:
            continue
        stats.attempted += 1
        try:
            reply = model.generate_text(build_website_prompt(record, location))
        except Exception as exc:  # noqa: BLE001
            stats.failed += 1
            logger.warning("Gemini website lookup failed for %s: %s", record.id, exc)
            continue

        parsed = extract_website(reply)
        if not parsed.ok:
            stats.failed += 1
            logger.warning("Gemini website parse failed for %s: %s", record.id, parsed.error)
            continue
        if parsed.value is None:
            logger.debug("Gemini found no website for %s", record.id)
            continue

        if record.set_website(parsed.value):
            record.add_note(WEBSITE_NOTE)
            stats.updated += 1
    return stats


def discover_socials(records: Sequence[BusinessRecord], model: TextModel) -> EnrichmentStats:
    stats = EnrichmentStats()
    for record in records:
        if record.website is None:
            continue
        stats.attempted += 1
        try:
            reply = model.generate_text(build_socials_prompt(record.website))
        except Exception as exc:  # noqa: BLE001
            stats.failed += 1
            logger.warning("Gemini social lookup failed for %s: %s", record.website, exc)
            continue

        parsed = extract_social_links(reply)
        if not parsed.ok:
            stats.failed += 1
            logger.warning("Gemini social parse failed for %s: %s", record.website, parsed.error)
            continue

        links: List[str] = parsed.value
        if links and record.add_socials(links):
            record.add_note(SOCIALS_NOTE)
            stats.updated += 1
    return stats
