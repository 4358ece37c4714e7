import copy

import pytest
from conftest import FakeModel, FakePlacesClient

from localbiz_scout.core import pipeline as pipeline_module
from localbiz_scout.core.config import ConfigError, Settings
from localbiz_scout.core.pipeline import EnrichmentPipeline, find_businesses
from localbiz_scout.models import SearchRequest
from localbiz_scout.vendors.google_places import GooglePlacesError

AUSTIN_BAKERY = SearchRequest(location="Austin, TX", category="Bakery", limit=10)


def test_find_businesses_maps_candidates_in_order(bakery_places):
    records = find_businesses(bakery_places, AUSTIN_BAKERY)

    assert [r.id for r in records] == ["p1", "p2", "p3"]
    assert bakery_places.calls[0] == ("text_search", "Bakery in Austin, TX")
    assert records[1].address == "1501 E 7th St, Austin, TX"
    assert records[2].website is None


def test_find_businesses_truncates_before_fetching_details(bakery_places):
    records = find_businesses(bakery_places, SearchRequest("Austin, TX", "Bakery", 2))

    assert len(records) == 2
    detail_calls = [c for c in bakery_places.calls if c[0] == "place_details"]
    assert detail_calls == [("place_details", "p1"), ("place_details", "p2")]


def test_find_businesses_skips_failed_details(bakery_places):
    bakery_places.details["p2"] = GooglePlacesError("NOT_FOUND", status="NOT_FOUND")

    records = find_businesses(bakery_places, AUSTIN_BAKERY)

    assert [r.id for r in records] == ["p1", "p3"]


def test_find_businesses_zero_results():
    assert find_businesses(FakePlacesClient(), AUSTIN_BAKERY) == []


def test_run_requires_places_key_before_any_call(bakery_places):
    pipeline = EnrichmentPipeline(Settings(), places_client=bakery_places, model_client=FakeModel())
    with pytest.raises(ConfigError):
        pipeline.run(AUSTIN_BAKERY)
    assert bakery_places.calls == []


def test_run_without_model_returns_gateway_output(bakery_places, caplog):
    settings = Settings(google_maps_api_key="maps-key")
    raw = find_businesses(copy.deepcopy(bakery_places), AUSTIN_BAKERY)

    pipeline = EnrichmentPipeline(settings, places_client=bakery_places)
    with caplog.at_level("INFO"):
        records = pipeline.run(AUSTIN_BAKERY)

    assert [r.to_dict() for r in records] == [r.to_dict() for r in raw]
    assert pipeline.ai_status == "disabled"
    assert "AI enrichment skipped: GOOGLE_GEMINI_API_KEY not configured" in caplog.messages

    # Scenario: 3 candidates, 2 with a website, no model credential.
    assert len(records) == 3
    assert sum(1 for r in records if r.website) == 2
    assert records[2].website is None and records[2].socials == []


def test_run_upgrades_website_then_finds_socials(settings, bakery_places):
    def reply(prompt):
        if "Corner Crumbs" in prompt:
            return '{"website": "https://cornercrumbs.example"}'
        if "cornercrumbs.example" in prompt:
            return '```json\n["https://instagram.com/cornercrumbs"]\n```'
        return "[]"

    model = FakeModel(reply)
    pipeline = EnrichmentPipeline(settings, places_client=bakery_places, model_client=model)

    records = pipeline.run(AUSTIN_BAKERY)

    crumbs = records[2]
    assert crumbs.website == "https://cornercrumbs.example"
    assert crumbs.socials == ["https://instagram.com/cornercrumbs"]
    assert crumbs.verification_notes == (
        "Fetched from Google Places API"
        " | Website inferred by Gemini (unverified, check manually)"
        " | Socials via Gemini"
    )
    # one website prompt plus three social prompts
    assert len(model.prompts) == 4
    assert pipeline.ai_status == "enabled"


def test_run_respects_disabled_passes(bakery_places):
    settings = Settings(
        google_maps_api_key="maps-key",
        gemini_api_key="gemini-key",
        ai_website_discovery=False,
        ai_social_discovery=False,
    )
    model = FakeModel('{"website": "https://x.example"}')
    records = EnrichmentPipeline(settings, places_client=bakery_places, model_client=model).run(AUSTIN_BAKERY)

    assert model.prompts == []
    assert records[2].website is None


def test_run_propagates_search_failure(settings):
    error = GooglePlacesError("denied", status="REQUEST_DENIED", payload={"status": "REQUEST_DENIED"})
    pipeline = EnrichmentPipeline(settings, places_client=FakePlacesClient(search_error=error), model_client=FakeModel())
    with pytest.raises(GooglePlacesError):
        pipeline.run(AUSTIN_BAKERY)


def test_output_invariants_hold_with_noisy_model(settings, bakery_places):
    model = FakeModel(lambda prompt: '["javascript:alert(1)", "https://facebook.com/x", "www.y.com"]'
                      if "Website:" in prompt else '{"website": "www.nope.com"}')
    records = EnrichmentPipeline(settings, places_client=bakery_places, model_client=model).run(AUSTIN_BAKERY)

    for record in records:
        assert record.website is None or record.website.startswith(("http://", "https://"))
        assert all(link.startswith(("http://", "https://")) for link in record.socials)
        if record.socials:
            assert record.website is not None


def test_from_settings_builds_clients(monkeypatch):
    built = {}

    class DummyGemini:
        def __init__(self, api_key, **kwargs):
            built["gemini"] = (api_key, kwargs)

    monkeypatch.setattr(pipeline_module, "GeminiClient", DummyGemini)

    pipeline = EnrichmentPipeline.from_settings(Settings(google_maps_api_key="m", gemini_api_key="g", gemini_timeout=5))
    assert pipeline.places_client.api_key == "m"
    assert pipeline.ai_status == "enabled"
    assert built["gemini"][0] == "g"
    assert built["gemini"][1]["timeout"] == 5

    assert EnrichmentPipeline.from_settings(Settings(google_maps_api_key="m")).ai_status == "disabled"


def test_from_settings_degrades_when_gemini_client_fails(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("sdk misconfigured")

    monkeypatch.setattr(pipeline_module, "GeminiClient", broken)
    pipeline = EnrichmentPipeline.from_settings(Settings(google_maps_api_key="m", gemini_api_key="g"))
    assert pipeline.ai_status == "disabled"
