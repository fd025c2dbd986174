"""Shared fakes for exercising the planner without network access."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from memory.app_state import WardrobeState
from models.seed_data import INITIAL_WARDROBE
from stylist_app.config import AppConfig
from tools.genai_client import OutfitGenerationClient

TEXT_MODEL = "text-model"
IMAGE_MODEL = "image-model"


def plan_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "title": "Soft Power",
        "description": "Cream knit over wide trousers",
        "reasoning": "Cool and cloudy, relaxed mood, two office meetings.",
        "selectedItemIds": ["7", "2", "4"],
        "missingItems": [{"name": "Trench Coat", "type": "Outerwear", "reason": "Rain later today"}],
        "weatherNote": "Cloudy 58°F",
        "moodMatch": "Elastic waist and soft knit for comfort",
    }
    payload.update(overrides)
    return payload


def text_response(payload: Dict[str, Any] | None = None, raw: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(text=raw if raw is not None else json.dumps(payload or plan_payload()))


def image_response(*parts: SimpleNamespace) -> SimpleNamespace:
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def inline_part(data: bytes = b"png-bytes", mime_type: str = "image/png") -> SimpleNamespace:
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text: str = "Here is your look") -> SimpleNamespace:
    return SimpleNamespace(inline_data=None, text=text)


class FakeModels:
    """Stands in for ``genai.Client().models`` and records every call."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.text_result: Any = text_response()
        self.image_result: Any = image_response(text_part(), inline_part())

    def generate_content(self, *, model: str, contents: Any, config: Any = None) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        result = self.text_result if model == TEXT_MODEL else self.image_result
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def models_called(self) -> List[str]:
        return [call["model"] for call in self.calls]


class FakeGenAI:
    def __init__(self) -> None:
        self.models = FakeModels()


def make_config(api_key: str | None = "test-key") -> AppConfig:
    return AppConfig(api_key=api_key, text_model=TEXT_MODEL, image_model=IMAGE_MODEL)


@pytest.fixture()
def fake_genai() -> FakeGenAI:
    return FakeGenAI()


@pytest.fixture()
def config() -> AppConfig:
    return make_config()


@pytest.fixture()
def generation_client(config: AppConfig, fake_genai: FakeGenAI) -> OutfitGenerationClient:
    return OutfitGenerationClient(config, client=fake_genai, id_factory=lambda: "rec-1")


@pytest.fixture()
def state() -> WardrobeState:
    return WardrobeState(inventory=INITIAL_WARDROBE)
