"""Mood catalog fed into the planning prompt."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserMood:
    """A selectable mood. ``value`` is the description the model sees."""

    label: str
    value: str
    icon: str

    def prompt_text(self) -> str:
        return f"{self.label} ({self.value})"

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "value": self.value, "icon": self.icon}


MOODS: List[UserMood] = [
    UserMood(label="Confident", value="bold, structured, power-dressing", icon="⚡"),
    UserMood(
        label="Comfortable",
        value="loose, soft fabrics, elastic waist, cozy (feeling bloated/tired)",
        icon="☁️",
    ),
    UserMood(label="Chic", value="trendy, minimalist, monochromatic", icon="✨"),
    UserMood(label="Energetic", value="bright colors, sporty, functional", icon="\U0001f525"),
    UserMood(label="Romantic", value="soft textures, pastels, dresses", icon="\U0001f339"),
]


def get_mood(label: str | None) -> UserMood:
    """Return the catalog mood matching ``label`` case-insensitively."""

    normalized = (label or "").strip().lower()
    for mood in MOODS:
        if mood.label.lower() == normalized:
            return mood
    logger.info("Unknown mood '%s'", label)
    raise ValueError(f"Unknown mood '{label}'. Valid options: {[mood.label for mood in MOODS]}")


__all__ = ["UserMood", "MOODS", "get_mood"]
