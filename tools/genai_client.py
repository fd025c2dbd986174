"""Gemini-backed generation client for outfit plans and outfit visuals.

The client is the boundary between the app and the remote models: every
remote failure is converted here into one of the two coarse error kinds the
planner understands. Text failures raise :class:`GenerationFailed`; image
failures never escape and degrade to a placeholder image reference.
"""

from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from logic.prompts import build_planning_prompt, build_visual_prompt
from logic.validation import REQUIRED_PLAN_FIELDS, OutfitPlanPayload, decode_plan_payload
from models.outfit import MissingItem, OutfitRecommendation
from models.wardrobe_item import WardrobeItem
from stylist_app.config import AppConfig
from stylist_app.errors import GenerationFailed, VisualUnavailable
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.observability import instrument_call

LOGGER = get_logger(__name__)

PLACEHOLDER_IMAGE = "https://picsum.photos/600/800?blur=5"
VISUAL_ASPECT_RATIO = "3:4"


def _string(description: str | None = None) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


PLAN_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "title": _string("Catchy name for the look"),
        "description": _string("Short visual description of the outfit"),
        "reasoning": _string("Why this works for the mood, weather, and schedule"),
        "selectedItemIds": types.Schema(
            type=types.Type.ARRAY,
            items=_string(),
            description="List of IDs from the inventory that are used",
        ),
        "missingItems": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={"name": _string(), "type": _string(), "reason": _string()},
                required=["name", "type", "reason"],
            ),
        ),
        "weatherNote": _string("Summary of weather influencing choice (e.g., 'Rainy 65°F')"),
        "moodMatch": _string("How this addresses the specific mood (e.g. comfort for bloating)"),
    },
    required=list(REQUIRED_PLAN_FIELDS),
)


@dataclass(frozen=True)
class PlanningContext:
    """Free-text context for one planning request."""

    schedule: str
    mood: str
    location: str
    custom_request: Optional[str] = None
    target_date: Optional[str] = None

    def validate(self) -> None:
        for name in ("schedule", "mood", "location"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string")
        if not self.mood.strip():
            raise ValueError("mood must be a non-empty string")
        if not self.location.strip():
            raise ValueError("location must be a non-empty string")


def resolve_items(selected_ids: Iterable[str], inventory: Iterable[WardrobeItem]) -> List[WardrobeItem]:
    """Map returned ids onto inventory items by exact match, in returned order.

    Ids that match nothing are dropped silently.
    """

    by_id: Dict[str, WardrobeItem] = {item.id: item for item in inventory}
    return [by_id[item_id] for item_id in selected_ids if item_id in by_id]


def extract_inline_image(response: Any) -> Optional[str]:
    """Return the first inline image part of the first candidate as a data URI."""

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is None or not getattr(inline, "data", None):
            continue
        data = inline.data
        encoded = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
        mime_type = getattr(inline, "mime_type", None) or "image/png"
        return f"data:{mime_type};base64,{encoded}"
    return None


def _millisecond_id() -> str:
    return str(int(time.time() * 1000))


class OutfitGenerationClient:
    """Builds prompts, calls Gemini and maps responses onto local records."""

    def __init__(
        self,
        config: AppConfig,
        client: Any | None = None,
        id_factory: Callable[[], str] = _millisecond_id,
    ) -> None:
        self.config = config
        self._client = client
        self._id_factory = id_factory

    def _get_client(self) -> Any:
        if self._client is None:
            timeout_ms = int(self.config.request_timeout_seconds * 1000)
            self._client = genai.Client(
                api_key=self.config.require_api_key(),
                http_options=types.HttpOptions(timeout=timeout_ms),
            )
        return self._client

    @instrument_call("plan_outfit")
    def plan_outfit(self, inventory: Iterable[WardrobeItem], context: PlanningContext) -> OutfitRecommendation:
        """Ask the text model for an outfit and assemble the recommendation."""

        self.config.require_api_key()
        context.validate()
        snapshot = list(inventory)

        with operation_context("client:plan_outfit") as correlation_id:
            prompt = build_planning_prompt(
                snapshot,
                schedule=context.schedule,
                mood=context.mood,
                location=context.location,
                custom_request=context.custom_request,
                target_date=context.target_date,
            )
            log_event(
                LOGGER,
                logging.INFO,
                "plan_request_built",
                correlation_id=correlation_id,
                model=self.config.text_model,
                inventory_size=len(snapshot),
                prompt=prompt,
            )

            try:
                response = self._get_client().models.generate_content(
                    model=self.config.text_model,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        tools=[types.Tool(google_search=types.GoogleSearch())],
                        response_mime_type="application/json",
                        response_schema=PLAN_RESPONSE_SCHEMA,
                    ),
                )
                raw_text = response.text
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "plan_request_failed",
                    correlation_id=correlation_id,
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                raise GenerationFailed() from exc

            try:
                payload = decode_plan_payload(raw_text)
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "plan_payload_invalid",
                    correlation_id=correlation_id,
                    errors=[error.get("msg") for error in exc.errors()],
                )
                raise GenerationFailed() from exc

            recommendation = self._assemble(payload, snapshot)
            log_event(
                LOGGER,
                logging.INFO,
                "plan_resolved",
                correlation_id=correlation_id,
                selected=len(payload.selected_item_ids),
                resolved=len(recommendation.items),
                missing_items=len(recommendation.missing_items),
            )
            return recommendation

    def _assemble(self, payload: OutfitPlanPayload, inventory: List[WardrobeItem]) -> OutfitRecommendation:
        return OutfitRecommendation(
            id=self._id_factory(),
            title=payload.title,
            description=payload.description,
            reasoning=payload.reasoning,
            items=resolve_items(payload.selected_item_ids, inventory),
            missing_items=[
                MissingItem(name=gap.name, type=gap.type, reason=gap.reason) for gap in payload.missing_items
            ],
            weather_note=payload.weather_note,
            mood_match=payload.mood_match,
        )

    @instrument_call("generate_visual")
    def generate_visual(self, description: str) -> str:
        """Return a displayable image reference; the placeholder on any failure."""

        with operation_context("client:generate_visual") as correlation_id:
            try:
                return self._render_visual(description)
            except VisualUnavailable as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "visual_unavailable",
                    correlation_id=correlation_id,
                    reason=exc.message,
                )
                return PLACEHOLDER_IMAGE

    def _render_visual(self, description: str) -> str:
        if not self.config.has_api_key:
            raise VisualUnavailable("API key not configured")
        try:
            response = self._get_client().models.generate_content(
                model=self.config.image_model,
                contents=build_visual_prompt(description),
                config=types.GenerateContentConfig(
                    image_config=types.ImageConfig(aspect_ratio=VISUAL_ASPECT_RATIO),
                ),
            )
        except Exception as exc:
            raise VisualUnavailable(f"Image request failed: {type(exc).__name__}") from exc

        image_reference = extract_inline_image(response)
        if image_reference is None:
            raise VisualUnavailable("No image data found in response")
        return image_reference


__all__ = [
    "OutfitGenerationClient",
    "PlanningContext",
    "PLACEHOLDER_IMAGE",
    "PLAN_RESPONSE_SCHEMA",
    "extract_inline_image",
    "resolve_items",
]
