"""Seed data used before any live data exists."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List

from models.calendar_event import CalendarEvent
from models.taxonomy import ClothingCategory, Occasion
from models.wardrobe_item import WardrobeItem


def _picsum(seed: int | str, size: str = "200/200") -> str:
    return f"https://picsum.photos/{size}?random={seed}"


INITIAL_WARDROBE: List[WardrobeItem] = [
    WardrobeItem(
        id="1",
        category=ClothingCategory.TOP,
        name="White Silk Blouse",
        color="White",
        image_url=_picsum(1),
        tags=["classic", "work", "clean"],
        brand="Theory",
    ),
    WardrobeItem(
        id="2",
        category=ClothingCategory.BOTTOM,
        name="High-waisted Wide Leg Trousers",
        color="Beige",
        image_url=_picsum(2),
        tags=["comfortable", "chic", "work"],
        brand="Zara",
    ),
    WardrobeItem(
        id="3",
        category=ClothingCategory.OUTERWEAR,
        name="Oversized Wool Blazer",
        color="Charcoal",
        image_url=_picsum(3),
        tags=["trendy", "layering", "warm"],
        brand="Everlane",
    ),
    WardrobeItem(
        id="4",
        category=ClothingCategory.SHOES,
        name="Leather Loafers",
        color="Black",
        image_url=_picsum(4),
        tags=["flat", "walking", "classic"],
        brand="Gucci",
    ),
    WardrobeItem(
        id="5",
        category=ClothingCategory.DRESS,
        name="Floral Midi Dress",
        color="Multicolor",
        image_url=_picsum(5),
        tags=["spring", "brunch", "flowy"],
        brand="Reformation",
    ),
    WardrobeItem(
        id="6",
        category=ClothingCategory.ACCESSORY,
        name="Gold Hoop Earrings",
        color="Gold",
        image_url=_picsum(6),
        tags=["jewelry", "everyday"],
    ),
    WardrobeItem(
        id="7",
        category=ClothingCategory.TOP,
        name="Cashmere Sweater",
        color="Cream",
        image_url=_picsum(7),
        tags=["cozy", "warm", "soft"],
        brand="Uniqlo",
    ),
    WardrobeItem(
        id="8",
        category=ClothingCategory.BOTTOM,
        name="Vintage 501 Jeans",
        color="Blue",
        image_url=_picsum(8),
        tags=["casual", "denim", "sturdy"],
        brand="Levis",
    ),
]

OCCASION_PRESETS: List[Dict[str, str]] = [
    {"label": "Office / Meetings", "value": Occasion.WORK.value},
    {"label": "Casual / Errands", "value": Occasion.CASUAL.value},
    {"label": "Date Night / Dinner", "value": Occasion.DATE_NIGHT.value},
    {"label": "Travel / Airport", "value": Occasion.TRAVEL.value},
    {"label": "Formal Event", "value": Occasion.FORMAL.value},
]


def mock_calendar_events(today: date | None = None) -> List[CalendarEvent]:
    """Mock agenda spread over the next few days, relative to ``today``."""

    base = today or date.today()

    def offset(days: int) -> str:
        return (base + timedelta(days=days)).isoformat()

    return [
        CalendarEvent(id="1", date=offset(0), time="09:00 AM", title="Q4 Strategy Review", type=Occasion.WORK),
        CalendarEvent(id="2", date=offset(0), time="01:00 PM", title="Lunch with Client", type=Occasion.WORK),
        CalendarEvent(id="3", date=offset(1), time="06:30 PM", title="Dinner at Nobu", type=Occasion.DATE_NIGHT),
        CalendarEvent(id="4", date=offset(2), time="08:00 AM", title="Morning Gym Session", type=Occasion.GYM),
        CalendarEvent(id="5", date=offset(3), time="10:00 AM", title="Travel to Paris", type=Occasion.TRAVEL),
    ]


@dataclass(frozen=True)
class Trend:
    id: int
    title: str
    image: str
    author: str
    likes: str
    is_ad: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "image": self.image,
            "author": self.author,
            "likes": self.likes,
            "is_ad": self.is_ad,
        }


TRENDS: List[Trend] = [
    Trend(id=1, title="Old Money Aesthetic", image=_picsum(10, "400/500"), author="Vogue", likes="12k"),
    Trend(id=2, title="90s Minimalist", image=_picsum(11, "400/500"), author="StyleCaster", likes="8.5k"),
    Trend(id=3, title="Fall Layers", image=_picsum(12, "400/500"), author="Ralph Lauren", likes="22k", is_ad=True),
    Trend(id=4, title="Utility Chic", image=_picsum(13, "400/500"), author="Hypebeast", likes="5k"),
]


__all__ = ["INITIAL_WARDROBE", "OCCASION_PRESETS", "TRENDS", "Trend", "mock_calendar_events"]
