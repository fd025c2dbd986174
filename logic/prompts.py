"""Prompt construction for outfit planning and outfit visuals."""

from __future__ import annotations

from typing import Iterable, List

from models.outfit import OutfitRecommendation
from models.wardrobe_item import WardrobeItem

PLANNING_TASKS: List[str] = [
    "USE THE GOOGLE SEARCH TOOL to find the current weather for the specified location ({location}). This is CRITICAL.",
    "Analyze the user's schedule. If there are multiple events (e.g. Work then Dinner), suggest an outfit that transitions well or is versatile.",
    "Select the best combination of items from the inventory. Only use IDs from the inventory list.",
    "Identify if any key piece is missing to complete the look (Gap Analysis) and recommend it.",
    "Provide a reasoning that ties the weather, the schedule, and the user's mood together.",
    "Note how the weather and the mood influenced the choice.",
]

VISUAL_TEMPLATE = (
    "High fashion photography, full body shot.\n"
    "A stylish person wearing: {description}.\n"
    "The setting should be neutral and minimal studio lighting.\n"
    "Photorealistic, 8k resolution, cinematic lighting."
)


def format_inventory(inventory: Iterable[WardrobeItem]) -> str:
    """One advisory line per item; the model is asked to echo back ids only."""

    return "\n".join(
        f"- ID: {item.id}, Name: {item.name}, Color: {item.color}, "
        f"Category: {item.category.value}, Tags: {', '.join(item.tags)}"
        for item in inventory
    )


def build_planning_prompt(
    inventory: Iterable[WardrobeItem],
    schedule: str,
    mood: str,
    location: str,
    custom_request: str | None = None,
    target_date: str | None = None,
) -> str:
    """Compose the single stylist instruction sent to the text model."""

    tasks = "\n".join(
        f"{index}. {task.format(location=location)}" for index, task in enumerate(PLANNING_TASKS, start=1)
    )
    date_line = f"- Date: {target_date}\n" if target_date else ""
    return (
        "Act as a world-class fashion stylist.\n"
        "User Context:\n"
        f"{date_line}"
        f"- Schedule/Events: {schedule}\n"
        f"- Mood/Feeling: {mood} (Note: If mood implies comfort/bloated, prioritize non-restrictive clothing).\n"
        f"- Location: {location}\n"
        f"- Specific Request: {custom_request or 'None'}\n"
        "\n"
        "Available Wardrobe Inventory:\n"
        f"{format_inventory(inventory)}\n"
        "\n"
        "Task:\n"
        f"{tasks}\n"
        "\n"
        "Return the result in JSON format."
    )


def build_visual_prompt(description: str) -> str:
    return VISUAL_TEMPLATE.format(description=description.strip())


def describe_for_visual(recommendation: OutfitRecommendation) -> str:
    """Recommendation description followed by the comma-joined item names."""

    names = ", ".join(item.name for item in recommendation.items)
    return f"{recommendation.description} {names}".strip()


__all__ = [
    "PLANNING_TASKS",
    "VISUAL_TEMPLATE",
    "format_inventory",
    "build_planning_prompt",
    "build_visual_prompt",
    "describe_for_visual",
]
