"""Wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from models.taxonomy import ClothingCategory, normalise_tags, validate_category


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


@dataclass(frozen=True)
class WardrobeItem:
    """Represents an item in the user's wardrobe. Identity is ``id``."""

    id: str
    category: ClothingCategory
    name: str
    color: str
    image_url: str
    tags: Tuple[str, ...] = ()
    brand: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("WardrobeItem requires a non-empty id")
        object.__setattr__(self, "category", validate_category(self.category))
        object.__setattr__(self, "tags", tuple(normalise_tags(self.tags)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "color": self.color,
            "image_url": self.image_url,
            "tags": list(self.tags),
            "brand": self.brand,
        }


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from loose metadata."""

    required_fields = ["id", "category", "name", "color", "image_url"]
    missing = [field for field in required_fields if not metadata.get(field)]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    return WardrobeItem(
        id=str(metadata["id"]),
        category=validate_category(metadata["category"]),
        name=str(metadata["name"]),
        color=str(metadata["color"]),
        image_url=str(metadata["image_url"]),
        tags=_ensure_list(metadata.get("tags")),
        brand=metadata.get("brand") or None,
    )


__all__ = ["WardrobeItem", "from_raw_metadata"]
