"""Generation client request/response mapping."""

from __future__ import annotations

import base64

import pytest

from conftest import (
    IMAGE_MODEL,
    TEXT_MODEL,
    FakeGenAI,
    image_response,
    inline_part,
    make_config,
    plan_payload,
    text_part,
    text_response,
)
from logic.validation import REQUIRED_PLAN_FIELDS
from models.seed_data import INITIAL_WARDROBE
from stylist_app.errors import ConfigurationMissing, GenerationFailed
from tools.genai_client import (
    PLACEHOLDER_IMAGE,
    OutfitGenerationClient,
    PlanningContext,
    resolve_items,
)


def _context(**overrides) -> PlanningContext:
    values = {
        "schedule": "[09:00 AM] Q4 Strategy Review",
        "mood": "Comfortable (loose, soft fabrics)",
        "location": "New York, NY",
    }
    values.update(overrides)
    return PlanningContext(**values)


def test_plan_outfit_maps_ids_back_to_inventory(generation_client: OutfitGenerationClient) -> None:
    recommendation = generation_client.plan_outfit(INITIAL_WARDROBE, _context())

    assert recommendation.id == "rec-1"
    assert [item.id for item in recommendation.items] == ["7", "2", "4"]
    assert recommendation.items[0] is INITIAL_WARDROBE[6]
    assert recommendation.missing_items[0].name == "Trench Coat"
    assert recommendation.weather_note == "Cloudy 58°F"
    assert recommendation.mood_match.startswith("Elastic waist")


def test_unknown_ids_are_dropped_without_error(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    fake_genai.models.text_result = text_response(plan_payload(selectedItemIds=["3", "does-not-exist"]))

    recommendation = generation_client.plan_outfit(INITIAL_WARDROBE, _context())

    assert len(recommendation.items) == 1
    assert recommendation.items[0].id == "3"


@pytest.mark.parametrize(
    "selected",
    [[], ["1"], ["8", "1", "5"], ["x", "y"], ["2", "2"], ["6", "42", "7", ""]],
)
def test_resolved_items_are_always_a_subset_of_inventory(selected) -> None:
    inventory = INITIAL_WARDROBE[:5]
    inventory_ids = {item.id for item in inventory}

    resolved = resolve_items(selected, inventory)

    assert all(item.id in inventory_ids for item in resolved)
    assert [item.id for item in resolved] == [item_id for item_id in selected if item_id in inventory_ids]


@pytest.mark.parametrize("missing_field", REQUIRED_PLAN_FIELDS)
def test_missing_required_field_fails_generation(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI, missing_field: str
) -> None:
    payload = plan_payload()
    del payload[missing_field]
    fake_genai.models.text_result = text_response(payload)

    with pytest.raises(GenerationFailed):
        generation_client.plan_outfit(INITIAL_WARDROBE, _context())


@pytest.mark.parametrize("raw", ["not json", "", "[]", '{"title": 3}'])
def test_malformed_payload_fails_generation(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI, raw: str
) -> None:
    fake_genai.models.text_result = text_response(raw=raw)

    with pytest.raises(GenerationFailed):
        generation_client.plan_outfit(INITIAL_WARDROBE, _context())


def test_mistyped_selected_ids_fail_generation(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    fake_genai.models.text_result = text_response(plan_payload(selectedItemIds="1,2"))

    with pytest.raises(GenerationFailed):
        generation_client.plan_outfit(INITIAL_WARDROBE, _context())


def test_transport_error_collapses_to_generation_failed(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    fake_genai.models.text_result = TimeoutError("deadline exceeded")

    with pytest.raises(GenerationFailed) as excinfo:
        generation_client.plan_outfit(INITIAL_WARDROBE, _context())

    assert isinstance(excinfo.value.__cause__, TimeoutError)
    assert excinfo.value.message == "Failed to generate outfit. Please try again."


def test_missing_api_key_is_raised_before_any_call(fake_genai: FakeGenAI) -> None:
    client = OutfitGenerationClient(make_config(api_key=None), client=fake_genai)

    with pytest.raises(ConfigurationMissing):
        client.plan_outfit(INITIAL_WARDROBE, _context())

    assert fake_genai.models.calls == []


def test_empty_schedule_is_accepted_but_location_is_required(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    generation_client.plan_outfit(INITIAL_WARDROBE, _context(schedule=""))
    assert len(fake_genai.models.calls) == 1

    with pytest.raises(ValueError):
        generation_client.plan_outfit(INITIAL_WARDROBE, _context(location="  "))
    assert len(fake_genai.models.calls) == 1


def test_plan_request_declares_schema_and_search_tool(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    generation_client.plan_outfit(INITIAL_WARDROBE, _context(target_date="2024-06-01"))

    call = fake_genai.models.calls[0]
    assert call["model"] == TEXT_MODEL
    config = call["config"]
    assert config.response_mime_type == "application/json"
    assert sorted(config.response_schema.required) == sorted(REQUIRED_PLAN_FIELDS)
    assert config.tools[0].google_search is not None

    prompt = call["contents"]
    assert "- ID: 1, Name: White Silk Blouse, Color: White, Category: Top, Tags: classic, work, clean" in prompt
    assert "Location: New York, NY" in prompt
    assert "Specific Request: None" in prompt
    assert "Date: 2024-06-01" in prompt


def test_generate_visual_returns_data_uri_for_first_inline_part(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    fake_genai.models.image_result = image_response(
        text_part(), inline_part(b"first", "image/jpeg"), inline_part(b"second")
    )

    reference = generation_client.generate_visual("Cream knit over wide trousers")

    assert reference == "data:image/jpeg;base64," + base64.b64encode(b"first").decode("ascii")
    call = fake_genai.models.calls[0]
    assert call["model"] == IMAGE_MODEL
    assert call["config"].image_config.aspect_ratio == "3:4"
    assert "A stylish person wearing: Cream knit over wide trousers." in call["contents"]


def test_generate_visual_without_image_part_returns_placeholder(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    fake_genai.models.image_result = image_response(text_part("I cannot draw that"))

    assert generation_client.generate_visual("anything") == PLACEHOLDER_IMAGE


def test_generate_visual_swallows_remote_errors(
    generation_client: OutfitGenerationClient, fake_genai: FakeGenAI
) -> None:
    fake_genai.models.image_result = RuntimeError("quota exhausted")

    reference = generation_client.generate_visual("anything")

    assert reference == PLACEHOLDER_IMAGE
    assert reference


def test_generate_visual_without_key_skips_the_call(fake_genai: FakeGenAI) -> None:
    client = OutfitGenerationClient(make_config(api_key=""), client=fake_genai)

    assert client.generate_visual("anything") == PLACEHOLDER_IMAGE
    assert fake_genai.models.calls == []


def test_sdk_client_is_built_once_with_request_timeout() -> None:
    client = OutfitGenerationClient(make_config())

    sdk_client = client._get_client()

    assert sdk_client._api_client._http_options.timeout == 60000
    assert client._get_client() is sdk_client


def test_sdk_client_uses_configured_timeout() -> None:
    config = make_config()
    config.request_timeout_seconds = 2.5

    sdk_client = OutfitGenerationClient(config)._get_client()

    assert sdk_client._api_client._http_options.timeout == 2500


def test_sdk_client_is_never_built_without_key() -> None:
    with pytest.raises(ConfigurationMissing):
        OutfitGenerationClient(make_config(api_key=None))._get_client()
