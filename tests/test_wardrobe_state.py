"""Domain records, seed data and the application state store."""

from __future__ import annotations

import threading
import time
from datetime import date
from typing import Any, Callable, List

import pytest

from memory.app_state import WardrobeState
from models.calendar_event import CalendarEvent, events_for_date
from models.mood import MOODS, get_mood
from models.outfit import MissingItem, OutfitRecommendation
from models.seed_data import INITIAL_WARDROBE, TRENDS, mock_calendar_events
from models.taxonomy import ClothingCategory, Occasion, validate_category, validate_occasion
from models.wardrobe_item import WardrobeItem, from_raw_metadata


def test_events_filtered_by_exact_date_string() -> None:
    events = [
        CalendarEvent(id="a", date="2024-06-01", time="09:00 AM", title="Standup", type=Occasion.WORK),
        CalendarEvent(id="b", date="2024-06-02", time="09:00 AM", title="Standup", type=Occasion.WORK),
        CalendarEvent(id="c", date="2024-06-01", time="TBD", title="Yoga", type=Occasion.GYM),
        CalendarEvent(id="d", date="2024-06-01T10:00", time="10:00 AM", title="Overlap", type=Occasion.WORK),
    ]

    scoped = events_for_date(events, "2024-06-01")

    assert [event.id for event in scoped] == ["a", "c"]
    assert events_for_date(events, date(2024, 6, 2))[0].id == "b"
    assert events_for_date(events, "2024-06-03") == []


def test_seed_wardrobe_shape() -> None:
    assert len(INITIAL_WARDROBE) == 8
    assert len({item.id for item in INITIAL_WARDROBE}) == 8
    assert INITIAL_WARDROBE[5].brand is None
    assert {item.category for item in INITIAL_WARDROBE} == set(ClothingCategory)
    assert any(trend.is_ad for trend in TRENDS)


def test_mock_calendar_is_relative_to_today() -> None:
    events = mock_calendar_events(date(2024, 12, 30))

    assert [event.date for event in events] == [
        "2024-12-30",
        "2024-12-30",
        "2024-12-31",
        "2025-01-01",
        "2025-01-02",
    ]
    assert events[2].type is Occasion.DATE_NIGHT


def test_taxonomy_accepts_labels_and_member_names() -> None:
    assert validate_category("outerwear") is ClothingCategory.OUTERWEAR
    assert validate_occasion("Date Night") is Occasion.DATE_NIGHT
    assert validate_occasion("date_night") is Occasion.DATE_NIGHT
    with pytest.raises(ValueError):
        validate_category("Hat")


def test_wardrobe_item_is_immutable_and_normalises_tags() -> None:
    item = WardrobeItem(
        id="x", category="Shoes", name="Boots", color="Brown", image_url="img", tags=[" rain ", "rain", ""]
    )

    assert item.category is ClothingCategory.SHOES
    assert item.tags == ("rain",)
    with pytest.raises(Exception):
        item.name = "Sandals"  # type: ignore[misc]


def test_from_raw_metadata_requires_core_fields() -> None:
    with pytest.raises(ValueError) as excinfo:
        from_raw_metadata({"id": "9", "name": "Scarf"})
    assert "category" in str(excinfo.value)

    item = from_raw_metadata(
        {"id": 9, "category": "Accessory", "name": "Scarf", "color": "Red", "image_url": "img", "tags": "winter"}
    )
    assert item.id == "9"
    assert item.tags == ("winter",)


def test_mood_catalog_lookup() -> None:
    assert [mood.label for mood in MOODS] == ["Confident", "Comfortable", "Chic", "Energetic", "Romantic"]
    assert get_mood("comfortable").prompt_text().startswith("Comfortable (loose, soft fabrics")
    with pytest.raises(ValueError):
        get_mood("")


def test_simulated_upload_appends_placeholder_item() -> None:
    state = WardrobeState(inventory=INITIAL_WARDROBE, id_factory=lambda: "1700000000000")

    item = state.simulate_upload()

    assert item.id == "1700000000000"
    assert item.name == "New Item 9"
    assert item.category is ClothingCategory.TOP
    assert item.tags == ("new", "untagged")
    assert state.inventory[-1] is item
    assert len(state.inventory) == 9


def test_duplicate_item_ids_are_rejected() -> None:
    state = WardrobeState(inventory=INITIAL_WARDROBE)

    with pytest.raises(ValueError):
        state.add_item(INITIAL_WARDROBE[0])


def test_new_id_skips_taken_ids() -> None:
    state = WardrobeState(inventory=INITIAL_WARDROBE, id_factory=lambda: "7")

    assert state.new_id() == "9"


def test_inventory_property_returns_copy() -> None:
    state = WardrobeState(inventory=INITIAL_WARDROBE)

    snapshot = state.inventory
    snapshot.clear()

    assert len(state.inventory) == 8


def test_event_lifecycle() -> None:
    state = WardrobeState()

    event = state.create_event("Lunch", "2024-06-01", "12:00 PM", Occasion.WORK)

    assert state.events_for("2024-06-01") == [event]
    with pytest.raises(ValueError):
        state.create_event("   ", "2024-06-01")
    assert state.remove_event(event.id)
    assert state.events == []


def _slow_fixed_id() -> str:
    time.sleep(0.002)
    return "100"


def _run_together(actions: List[Callable[[], Any]]) -> List[Any]:
    """Release every action at once from its own thread and collect results."""

    barrier = threading.Barrier(len(actions))
    results: List[Any] = []
    errors: List[BaseException] = []

    def worker(action: Callable[[], Any]) -> None:
        barrier.wait()
        try:
            results.append(action())
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(action,)) for action in actions]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)
    assert errors == []
    return results


def test_concurrent_uploads_get_distinct_ids() -> None:
    state = WardrobeState(inventory=INITIAL_WARDROBE, id_factory=_slow_fixed_id)

    added = _run_together([state.simulate_upload] * 8)

    assert sorted(item.id for item in added) == [str(n) for n in range(100, 108)]
    assert len(state.inventory) == 16


def test_concurrent_event_changes_are_not_lost() -> None:
    state = WardrobeState(id_factory=_slow_fixed_id)
    cancelled = state.create_event("Cancelled", "2024-06-01")

    def add_meeting() -> CalendarEvent:
        return state.create_event("Meeting", "2024-06-01")

    _run_together([lambda: state.remove_event(cancelled.id)] + [add_meeting] * 5)

    assert [event.title for event in state.events] == ["Meeting"] * 5
    assert len({event.id for event in state.events}) == 5


def test_create_item_allocates_id_and_rejects_duplicates() -> None:
    state = WardrobeState(inventory=INITIAL_WARDROBE, id_factory=lambda: "1")

    item = state.create_item(category="Outerwear", name="Trench", color="Camel", image_url="img", tags=["rain"])

    assert item.id == "9"
    assert item.tags == ("rain",)
    with pytest.raises(ValueError):
        state.create_item(category="Top", name="Tee", color="White", image_url="img", item_id="1")


def test_record_collections_cannot_be_mutated() -> None:
    item = INITIAL_WARDROBE[0]
    recommendation = OutfitRecommendation(
        id="r",
        title="Office",
        description="Navy blazer",
        reasoning="Meetings",
        items=[item],
        missing_items=[MissingItem("Coat", "Outerwear", "Rain")],
    )

    assert isinstance(item.tags, tuple)
    assert isinstance(recommendation.items, tuple)
    assert isinstance(recommendation.missing_items, tuple)
    with pytest.raises(AttributeError):
        recommendation.items.append(item)  # type: ignore[attr-defined]
    assert recommendation.to_dict()["items"][0]["tags"] == list(item.tags)
