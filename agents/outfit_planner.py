"""Planner controller: form state plus the two-phase outfit generation."""

from __future__ import annotations

import logging
import threading
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from logic.prompts import describe_for_visual
from logic.schedule import EMPTY_SCHEDULE_PROMPT, needs_default_day_confirmation, summarize_schedule
from memory.app_state import WardrobeState
from models.calendar_event import CalendarEvent, as_date_string
from models.mood import MOODS, UserMood, get_mood
from models.outfit import OutfitRecommendation
from models.taxonomy import Occasion, validate_occasion
from stylist_app.config import AppConfig
from stylist_app.errors import GenerationFailed, PlanInProgress, StylistError
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.calendar_provider import CalendarProvider
from tools.genai_client import OutfitGenerationClient, PlanningContext
from tools.location_provider import LocationProvider

LOGGER = get_logger(__name__)

ConfirmCallback = Callable[[str], bool]
Listener = Callable[[Dict[str, Any]], None]


class PlannerStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    TEXT_READY = "text_ready"
    COMPLETE = "complete"
    FAILED = "failed"


class OutfitPlanner:
    """Holds the planner form and drives text-then-image generation.

    Generation is split in two phases so the text recommendation can be shown
    while the image is still pending. ``request_plan`` takes the in-flight
    guard and ``complete_visual`` releases it, so a second request is refused
    until the whole pair has finished.
    """

    def __init__(
        self,
        config: AppConfig,
        state: WardrobeState,
        client: OutfitGenerationClient,
        calendar_provider: CalendarProvider | None = None,
        location_provider: LocationProvider | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config
        self.state = state
        self.client = client
        self.calendar_provider = calendar_provider
        self.location_provider = location_provider
        self.location = config.default_location
        self.mood: UserMood = MOODS[0]
        self.custom_request = ""
        self.target_date = today().isoformat()
        self.calendar_connected = False
        self.status = PlannerStatus.IDLE
        self.recommendation: Optional[OutfitRecommendation] = None
        self.image_reference: Optional[str] = None
        self.error_message: Optional[str] = None
        self._in_flight = threading.Lock()
        self._listeners: List[Listener] = []

    # Form state

    def select_mood(self, label: str) -> UserMood:
        self.mood = get_mood(label)
        return self.mood

    def set_location(self, location: str) -> None:
        self.location = location.strip()

    def set_custom_request(self, custom_request: str | None) -> None:
        self.custom_request = (custom_request or "").strip()

    def set_target_date(self, target_date: "str | date") -> None:
        self.target_date = as_date_string(target_date)

    def use_current_location(self) -> bool:
        """Replace the location with coordinates when the provider resolves one."""

        if self.location_provider is None:
            return False
        resolved = self.location_provider.resolve_location()
        if not resolved:
            LOGGER.info("Could not get location, keeping entered text")
            return False
        self.location = resolved
        return True

    # Agenda

    def sync_calendar(self) -> List[CalendarEvent]:
        if self.calendar_provider is None:
            raise ValueError("No calendar provider configured")
        events = self.calendar_provider.fetch_events()
        self.state.replace_events(events)
        self.calendar_connected = True
        log_event(LOGGER, logging.INFO, "calendar_synced", event_count=len(events))
        return events

    def add_event(
        self,
        title: str,
        time_label: str = "TBD",
        occasion: "str | Occasion" = Occasion.CASUAL,
        on_date: "str | date | None" = None,
    ) -> CalendarEvent:
        target = as_date_string(on_date) if on_date else self.target_date
        return self.state.create_event(title, target, time_label, validate_occasion(occasion))

    def remove_event(self, event_id: str) -> bool:
        return self.state.remove_event(event_id)

    def agenda(self) -> List[CalendarEvent]:
        return self.state.events_for(self.target_date)

    # Generation

    @property
    def in_flight(self) -> bool:
        return self._in_flight.locked()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in self._listeners:
            listener(snapshot)

    def build_context(self) -> PlanningContext:
        return PlanningContext(
            schedule=summarize_schedule(self.agenda()),
            mood=self.mood.prompt_text(),
            location=self.location,
            custom_request=self.custom_request or None,
            target_date=self.target_date,
        )

    def request_plan(self, confirm: ConfirmCallback | None = None) -> Optional[OutfitRecommendation]:
        """Phase one: produce the text recommendation.

        Returns ``None`` when the user declines the empty-schedule prompt. On
        success the planner is left in ``TEXT_READY`` with the guard held until
        :meth:`complete_visual` runs.
        """

        self.config.require_api_key()
        if not self._in_flight.acquire(blocking=False):
            raise PlanInProgress()
        try:
            recommendation = self._plan_text(confirm)
        except Exception:
            self._in_flight.release()
            raise
        if recommendation is None:
            self._in_flight.release()
        return recommendation

    def _plan_text(self, confirm: ConfirmCallback | None) -> Optional[OutfitRecommendation]:
        with operation_context("planner:request_plan") as correlation_id:
            agenda = self.agenda()
            if needs_default_day_confirmation(agenda, self.custom_request):
                if confirm is None or not confirm(EMPTY_SCHEDULE_PROMPT):
                    log_event(LOGGER, logging.INFO, "plan_declined", correlation_id=correlation_id)
                    return None

            context = self.build_context()
            context.validate()

            self.status = PlannerStatus.GENERATING
            self.recommendation = None
            self.image_reference = None
            self.error_message = None

            try:
                self._notify()
                recommendation = self.client.plan_outfit(self.state.inventory, context)
                self.recommendation = recommendation
                self.status = PlannerStatus.TEXT_READY
                log_event(
                    LOGGER,
                    logging.INFO,
                    "plan_text_ready",
                    correlation_id=correlation_id,
                    recommendation_id=recommendation.id,
                    item_count=len(recommendation.items),
                )
                self._notify()
            except Exception as exc:
                self.status = PlannerStatus.FAILED
                self.recommendation = None
                self.error_message = exc.message if isinstance(exc, StylistError) else GenerationFailed.user_message
                if not isinstance(exc, StylistError):
                    log_event(
                        LOGGER,
                        logging.ERROR,
                        "plan_text_crashed",
                        correlation_id=correlation_id,
                        error_type=type(exc).__name__,
                        exc_info=True,
                    )
                self._notify()
                raise
            return recommendation

    def complete_visual(self) -> str:
        """Phase two: fetch the image for the recommendation shown in phase one."""

        if self.status is not PlannerStatus.TEXT_READY or self.recommendation is None:
            raise RuntimeError("complete_visual requires a text recommendation awaiting its image")
        try:
            image_reference = self.client.generate_visual(describe_for_visual(self.recommendation))
            self.image_reference = image_reference
            self.status = PlannerStatus.COMPLETE
            self._notify()
            return image_reference
        finally:
            self._in_flight.release()

    def generate(self, confirm: ConfirmCallback | None = None) -> Optional[Dict[str, Any]]:
        """Run both phases in order and return the final snapshot."""

        if self.request_plan(confirm) is None:
            return None
        self.complete_visual()
        return self.snapshot()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "location": self.location,
            "mood": self.mood.to_dict(),
            "custom_request": self.custom_request,
            "target_date": self.target_date,
            "calendar_connected": self.calendar_connected,
            "agenda": [event.to_dict() for event in self.agenda()],
            "recommendation": self.recommendation.to_dict() if self.recommendation else None,
            "image_reference": self.image_reference,
            "image_pending": self.status is PlannerStatus.TEXT_READY,
            "in_flight": self.in_flight,
            "error": self.error_message,
        }


__all__ = ["OutfitPlanner", "PlannerStatus", "ConfirmCallback"]
