import sys
from pathlib import Path

import pytest

# Ensure `localbiz_scout` is importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from localbiz_scout.core.config import Settings  # noqa: E402


class FakePlacesClient:
    """In-memory stand-in for GooglePlacesClient keyed by place_id."""

    def __init__(self, results=None, details=None, search_error=None):
        self.results = results or []
        self.details = details or {}
        self.search_error = search_error
        self.calls = []

    def text_search(self, query):
        self.calls.append(("text_search", query))
        if self.search_error is not None:
            raise self.search_error
        return {"status": "OK" if self.results else "ZERO_RESULTS", "results": list(self.results)}

    def place_details(self, place_id):
        self.calls.append(("place_details", place_id))
        detail = self.details.get(place_id)
        if isinstance(detail, Exception):
            raise detail
        return detail or {}


class FakeModel:
    """Returns canned replies; a callable reply is invoked with the prompt."""

    def __init__(self, reply=""):
        self.reply = reply
        self.prompts = []

    def generate_text(self, prompt):
        self.prompts.append(prompt)
        reply = self.reply(prompt) if callable(self.reply) else self.reply
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def settings():
    return Settings(google_maps_api_key="maps-key", gemini_api_key="gemini-key")


@pytest.fixture
def bakery_places():
    results = [
        {"place_id": "p1", "name": "Sugar Mama's", "formatted_address": "1905 S 1st St, Austin, TX"},
        {"place_id": "p2", "name": "Easy Tiger", "formatted_address": "1501 E 7th St, Austin, TX"},
        {"place_id": "p3", "name": "Corner Crumbs", "formatted_address": "12 Oak Ave, Austin, TX"},
    ]
    details = {
        "p1": {
            "name": "Sugar Mama's Bakeshop",
            "formatted_address": "1905 S 1st St, Austin, TX 78704",
            "formatted_phone_number": "(512) 448-3727",
            "website": "https://sugarmamasbakeshop.com/",
            "types": ["bakery", "store"],
        },
        "p2": {
            "name": "Easy Tiger",
            "formatted_phone_number": "(512) 614-4972",
            "website": "https://easytigerusa.com/",
        },
        "p3": {"name": "Corner Crumbs"},
    }
    return FakePlacesClient(results=results, details=details)
