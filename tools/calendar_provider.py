"""Calendar collaborators that supply agenda entries to the planner."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Tuple

import google.auth
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
import requests

from models.calendar_event import CalendarEvent
from models.seed_data import mock_calendar_events
from models.taxonomy import Occasion


LOGGER = logging.getLogger(__name__)
SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]

OCCASION_KEYWORDS: Dict[Occasion, Tuple[str, ...]] = {
    Occasion.GYM: ("gym", "yoga", "run", "workout", "pilates"),
    Occasion.TRAVEL: ("flight", "airport", "train", "travel", "trip"),
    Occasion.DATE_NIGHT: ("date", "dinner", "drinks", "anniversary"),
    Occasion.FORMAL: ("gala", "wedding", "ceremony", "black tie", "formal"),
    Occasion.WORK: ("meeting", "sync", "review", "standup", "client", "office", "1:1", "interview"),
}


def classify_occasion(title: str) -> Occasion:
    """Keyword match on the event title; unmatched events are casual."""

    lower_title = title.lower()
    for occasion, keywords in OCCASION_KEYWORDS.items():
        if any(keyword in lower_title for keyword in keywords):
            return occasion
    return Occasion.CASUAL


class CalendarProvider(ABC):
    """Abstract calendar provider interface."""

    @abstractmethod
    def fetch_events(self) -> List[CalendarEvent]:
        """Return the user's upcoming agenda entries."""


class MockCalendarProvider(CalendarProvider):
    """Simulated calendar sync returning a fixed agenda relative to today."""

    def __init__(
        self,
        events: List[CalendarEvent] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._events = events
        self._today = today

    def fetch_events(self) -> List[CalendarEvent]:
        events = list(self._events) if self._events is not None else mock_calendar_events(self._today())
        LOGGER.info("Returning mock calendar events", extra={"event_count": len(events)})
        return events


class GoogleCalendarProvider(CalendarProvider):
    """Google Calendar provider with OAuth/ADC support.

    Failures are logged and yield an empty agenda so a broken sync never
    blocks planning.
    """

    def __init__(
        self,
        calendar_id: str | None = None,
        credentials_path: str | None = None,
        days_ahead: int = 4,
        timeout_seconds: float = 5.0,
        today: Callable[[], date] = date.today,
    ) -> None:
        if days_ahead < 1:
            raise ValueError("days_ahead must be at least 1")
        self.calendar_id = calendar_id or "primary"
        self.credentials_path = credentials_path
        self.days_ahead = days_ahead
        self.timeout_seconds = timeout_seconds
        self._today = today

    def _get_credentials(self):
        if self.credentials_path:
            credentials, _ = google.auth.load_credentials_from_file(
                self.credentials_path, scopes=SCOPES
            )
        else:
            credentials, _ = google.auth.default(scopes=SCOPES)

        if not credentials.valid:
            credentials.refresh(Request())

        return credentials

    @staticmethod
    def _parse_datetime(raw: str | None) -> datetime:
        if not raw:
            raise ValueError("Missing datetime value from calendar event")
        cleaned = raw.replace("Z", "+00:00")
        return datetime.fromisoformat(cleaned)

    def _coerce_event(self, payload: dict) -> CalendarEvent:
        start_info = payload.get("start", {})
        is_all_day = "date" in start_info and "dateTime" not in start_info
        start_time = self._parse_datetime(start_info.get("dateTime") or start_info.get("date"))
        title = payload.get("summary") or "Untitled event"
        return CalendarEvent(
            id=str(payload.get("id") or f"{start_time.isoformat()}-{title}"),
            date=start_time.date().isoformat(),
            time="All day" if is_all_day else start_time.strftime("%I:%M %p"),
            title=title,
            type=classify_occasion(title),
        )

    def fetch_events(self) -> List[CalendarEvent]:
        start_date = self._today()
        end_date = start_date + timedelta(days=self.days_ahead - 1)
        LOGGER.info(
            "Fetching calendar events",
            extra={"start_date": str(start_date), "end_date": str(end_date)},
        )

        try:
            credentials = self._get_credentials()
        except GoogleAuthError as exc:
            LOGGER.error("Failed to acquire Google credentials", exc_info=exc)
            return []

        params = {
            "timeMin": datetime.combine(start_date, datetime.min.time()).isoformat() + "Z",
            "timeMax": datetime.combine(end_date, datetime.max.time()).isoformat() + "Z",
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": 50,
        }
        headers = {"Authorization": f"Bearer {credentials.token}"}
        url = f"https://www.googleapis.com/calendar/v3/calendars/{self.calendar_id}/events"

        try:
            response = requests.get(url, headers=headers, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout:
            LOGGER.error("Google Calendar request timed out")
            return []
        except (requests.RequestException, ValueError) as exc:
            LOGGER.error("Calendar API unreachable", exc_info=exc)
            return []

        events: List[CalendarEvent] = []
        for item in payload.get("items", []):
            try:
                events.append(self._coerce_event(item))
            except ValueError as exc:
                LOGGER.warning("Skipping malformed calendar event", exc_info=exc)
        return events


__all__ = [
    "CalendarProvider",
    "GoogleCalendarProvider",
    "MockCalendarProvider",
    "classify_occasion",
]
