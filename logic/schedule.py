"""Turn the day's agenda into the schedule summary used in prompts."""

from __future__ import annotations

from typing import Iterable, List

from models.calendar_event import CalendarEvent

DEFAULT_DAY = "General Casual Day"
EMPTY_SCHEDULE_PROMPT = "Your schedule is empty. Proceed with a default 'Casual Day'?"


def summarize_schedule(events: Iterable[CalendarEvent]) -> str:
    """Render ``[time] title`` pairs, or the default day when nothing is booked."""

    parts: List[str] = [f"[{event.time}] {event.title}" for event in events]
    return ", ".join(parts) if parts else DEFAULT_DAY


def needs_default_day_confirmation(events: List[CalendarEvent], custom_request: str | None) -> bool:
    """An empty agenda with no custom request asks the user before generating."""

    return not events and not (custom_request or "").strip()


__all__ = ["DEFAULT_DAY", "EMPTY_SCHEDULE_PROMPT", "summarize_schedule", "needs_default_day_confirmation"]
