"""Canonical taxonomy definitions for wardrobe items and calendar events.

The enumeration values are the human-readable labels used both in prompts and
in the HTTP payloads, so they double as the wire representation.
"""

from enum import Enum
from typing import List


class ClothingCategory(str, Enum):
    TOP = "Top"
    BOTTOM = "Bottom"
    DRESS = "Dress"
    OUTERWEAR = "Outerwear"
    SHOES = "Shoes"
    ACCESSORY = "Accessory"


class Occasion(str, Enum):
    CASUAL = "Casual"
    WORK = "Work"
    FORMAL = "Formal"
    DATE_NIGHT = "Date Night"
    TRAVEL = "Travel"
    GYM = "Gym"


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a comparable key."""

    return value.strip().lower().replace("_", " ").replace("-", " ")


def validate_category(category: "str | ClothingCategory") -> ClothingCategory:
    """Return the canonical category, accepting labels or member names."""

    if isinstance(category, ClothingCategory):
        return category
    key = _normalize_key(str(category))
    for member in ClothingCategory:
        if key in (member.value.lower(), _normalize_key(member.name)):
            return member
    raise ValueError(f"Unknown category '{category}'. Valid options: {category_labels()}")


def validate_occasion(occasion: "str | Occasion") -> Occasion:
    """Return the canonical occasion, accepting labels or member names."""

    if isinstance(occasion, Occasion):
        return occasion
    key = _normalize_key(str(occasion))
    for member in Occasion:
        if key in (member.value.lower(), _normalize_key(member.name)):
            return member
    raise ValueError(f"Unknown occasion '{occasion}'. Valid options: {occasion_labels()}")


def normalise_tags(tags) -> List[str]:
    """Strip, drop empties and de-duplicate tags while keeping order."""

    seen = set()
    result: List[str] = []
    for tag in tags or []:
        cleaned = str(tag).strip()
        if cleaned and cleaned not in seen:
            result.append(cleaned)
            seen.add(cleaned)
    return result


def category_labels() -> List[str]:
    return [member.value for member in ClothingCategory]


def occasion_labels() -> List[str]:
    return [member.value for member in Occasion]


__all__ = [
    "ClothingCategory",
    "Occasion",
    "validate_category",
    "validate_occasion",
    "normalise_tags",
    "category_labels",
    "occasion_labels",
]
