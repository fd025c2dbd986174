"""Pydantic schemas for the remote plan payload and HTTP request bodies."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from models.taxonomy import ClothingCategory, Occasion


class MissingItemPayload(BaseModel):
    """Gap-analysis entry as returned by the model."""

    name: StrictStr
    type: StrictStr
    reason: StrictStr


class OutfitPlanPayload(BaseModel):
    """Strict decode of the JSON object returned by the text model.

    All seven fields are mandatory. Unknown extra keys are ignored; a missing
    or mistyped field rejects the whole payload.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: StrictStr
    description: StrictStr
    reasoning: StrictStr
    selected_item_ids: List[StrictStr] = Field(alias="selectedItemIds")
    missing_items: List[MissingItemPayload] = Field(alias="missingItems")
    weather_note: StrictStr = Field(alias="weatherNote")
    mood_match: StrictStr = Field(alias="moodMatch")


REQUIRED_PLAN_FIELDS = [
    "title",
    "description",
    "reasoning",
    "selectedItemIds",
    "missingItems",
    "weatherNote",
    "moodMatch",
]


def decode_plan_payload(raw_text: str | None) -> OutfitPlanPayload:
    """Parse and validate the model's JSON text. Raises ``ValidationError``."""

    return OutfitPlanPayload.model_validate_json(raw_text or "")


class WardrobeItemCreate(BaseModel):
    """Body for adding an item explicitly."""

    category: ClothingCategory
    name: str = Field(min_length=1)
    color: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    tags: List[str] = []
    brand: Optional[str] = None
    id: Optional[str] = None


class CalendarEventCreate(BaseModel):
    """Body for adding an agenda entry manually."""

    title: str = Field(min_length=1)
    time: str = "TBD"
    type: Occasion = Occasion.CASUAL
    date: Optional[dt.date] = None


class PlannerUpdate(BaseModel):
    """Partial update of the planner form."""

    location: Optional[str] = None
    mood: Optional[str] = None
    custom_request: Optional[str] = None
    target_date: Optional[dt.date] = None


class GenerateRequest(BaseModel):
    """Answer to the empty-schedule confirmation, if the client already has one."""

    confirm_default_day: bool = False


__all__ = [
    "MissingItemPayload",
    "OutfitPlanPayload",
    "REQUIRED_PLAN_FIELDS",
    "decode_plan_payload",
    "WardrobeItemCreate",
    "CalendarEventCreate",
    "PlannerUpdate",
    "GenerateRequest",
]
