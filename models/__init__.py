"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.calendar_event import CalendarEvent, events_for_date
from models.mood import MOODS, UserMood, get_mood
from models.outfit import MissingItem, OutfitRecommendation
from models.wardrobe_item import WardrobeItem, from_raw_metadata

__all__ = [
    "CalendarEvent",
    "events_for_date",
    "MOODS",
    "UserMood",
    "get_mood",
    "MissingItem",
    "OutfitRecommendation",
    "WardrobeItem",
    "from_raw_metadata",
]
