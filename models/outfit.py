"""Outfit recommendation records."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from models.wardrobe_item import WardrobeItem


@dataclass(frozen=True)
class MissingItem:
    name: str
    type: str
    reason: str


@dataclass(frozen=True)
class OutfitRecommendation:
    """One generated outfit proposal. Superseded wholesale by the next one."""

    id: str
    title: str
    description: str
    reasoning: str
    items: Tuple[WardrobeItem, ...] = ()
    missing_items: Tuple[MissingItem, ...] = ()
    weather_note: str = ""
    mood_match: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "missing_items", tuple(self.missing_items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "reasoning": self.reasoning,
            "items": [item.to_dict() for item in self.items],
            "missing_items": [
                {"name": gap.name, "type": gap.type, "reason": gap.reason} for gap in self.missing_items
            ],
            "weather_note": self.weather_note,
            "mood_match": self.mood_match,
        }
