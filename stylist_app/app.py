"""Root shell: owns application state and routes between views."""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict

from agents.outfit_planner import OutfitPlanner
from memory.app_state import WardrobeState
from models.mood import MOODS
from models.seed_data import INITIAL_WARDROBE, OCCASION_PRESETS, TRENDS
from models.wardrobe_item import WardrobeItem
from stylist_app.config import AppConfig
from stylist_app.logging_config import configure_logging, get_logger, log_event
from tools.calendar_provider import CalendarProvider, GoogleCalendarProvider, MockCalendarProvider
from tools.genai_client import OutfitGenerationClient
from tools.location_provider import IPGeolocationProvider, LocationProvider

LOGGER = get_logger(__name__)

TRAVEL_PLACEHOLDER = 'Use the Daily Planner with "Travel" occasion to pack efficiently.'


class View(str, Enum):
    PLANNER = "planner"
    WARDROBE = "wardrobe"
    TRENDS = "trends"
    TRAVEL = "travel"


class WardrobePlannerApp:
    """Wires together state, the generation client and the planner.

    Every collaborator can be injected so tests run without network access.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        state: WardrobeState | None = None,
        client: OutfitGenerationClient | None = None,
        calendar_provider: CalendarProvider | None = None,
        location_provider: LocationProvider | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging()
        self.state = state or WardrobeState(inventory=INITIAL_WARDROBE)
        self.client = client or OutfitGenerationClient(self.config)
        self.calendar_provider = calendar_provider or self._build_calendar_provider(today)
        self.location_provider = location_provider or IPGeolocationProvider(self.config.geolocation_url)
        self.planner = OutfitPlanner(
            config=self.config,
            state=self.state,
            client=self.client,
            calendar_provider=self.calendar_provider,
            location_provider=self.location_provider,
            today=today,
        )
        self.current_view = View.PLANNER

        if not self.config.has_api_key:
            log_event(LOGGER, logging.WARNING, "api_key_missing", environment=self.config.environment)

    def _build_calendar_provider(self, today: Callable[[], date]) -> CalendarProvider:
        if self.config.calendar_id:
            return GoogleCalendarProvider(
                calendar_id=self.config.calendar_id,
                credentials_path=self.config.google_credentials_path,
                days_ahead=self.config.calendar_days_ahead,
                today=today,
            )
        return MockCalendarProvider(today=today)

    def switch_view(self, view: "str | View") -> View:
        """Instantaneous, unguarded view change."""

        try:
            self.current_view = View(view)
        except ValueError as exc:
            raise ValueError(f"Unknown view '{view}'") from exc
        return self.current_view

    def render_view(self) -> Dict[str, Any]:
        """Payload for whatever view is active."""

        view = self.current_view
        if view is View.PLANNER:
            body: Dict[str, Any] = {
                "planner": self.planner.snapshot(),
                "moods": [mood.to_dict() for mood in MOODS],
                "occasions": OCCASION_PRESETS,
            }
        elif view is View.WARDROBE:
            body = {"items": [item.to_dict() for item in self.state.inventory]}
        elif view is View.TRENDS:
            body = {"trends": [trend.to_dict() for trend in TRENDS]}
        else:
            body = {"title": "Travel Mode", "text": TRAVEL_PLACEHOLDER}
        return {"view": view.value, **body}

    def add_item(self, item: WardrobeItem | None = None) -> WardrobeItem:
        """Append an item; without one, simulate a photo upload."""

        added = self.state.add_item(item) if item is not None else self.state.simulate_upload()
        self._log_added(added, simulated=item is None)
        return added

    def create_item(self, **fields: Any) -> WardrobeItem:
        """Append an item built from loose fields, allocating its id if needed."""

        added = self.state.create_item(**fields)
        self._log_added(added, simulated=False)
        return added

    def _log_added(self, item: WardrobeItem, simulated: bool) -> None:
        log_event(
            LOGGER,
            logging.INFO,
            "wardrobe_item_added",
            item_id=item.id,
            simulated=simulated,
            inventory_size=len(self.state.inventory),
        )


__all__ = ["WardrobePlannerApp", "View", "TRAVEL_PLACEHOLDER"]
