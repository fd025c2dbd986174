"""Calendar event model and agenda scoping."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List

from models.taxonomy import Occasion, validate_occasion


@dataclass(frozen=True)
class CalendarEvent:
    """One agenda entry. ``time`` is a display label and is never parsed."""

    id: str
    date: str
    time: str
    title: str
    type: Occasion = Occasion.CASUAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", validate_occasion(self.type))
        object.__setattr__(self, "date", as_date_string(self.date))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "title": self.title,
            "type": self.type.value,
        }


def as_date_string(value: "str | date") -> str:
    """Render a date as ``YYYY-MM-DD``; strings pass through stripped."""

    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def events_for_date(events: Iterable[CalendarEvent], target_date: "str | date") -> List[CalendarEvent]:
    """Return the events on ``target_date`` using exact date-string equality."""

    target = as_date_string(target_date)
    return [event for event in events if event.date == target]


__all__ = ["CalendarEvent", "as_date_string", "events_for_date"]
