"""Error taxonomy surfaced by the generation client and planner."""

from __future__ import annotations


class StylistError(Exception):
    """Base class for errors carrying a user-facing message."""

    user_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)
        self.message = message or self.user_message


class ConfigurationMissing(StylistError):
    """Raised before any network call when the API key is not configured."""

    user_message = "Please set your API_KEY in the environment variables."


class GenerationFailed(StylistError):
    """Text generation failed, timed out or returned an invalid payload."""

    user_message = "Failed to generate outfit. Please try again."


class VisualUnavailable(StylistError):
    """Image generation produced nothing usable. Never escapes the client."""

    user_message = "Outfit visual is unavailable."


class PlanInProgress(StylistError):
    """A generation pair is already in flight for this planner."""

    user_message = "An outfit is already being generated."


__all__ = [
    "StylistError",
    "ConfigurationMissing",
    "GenerationFailed",
    "VisualUnavailable",
    "PlanInProgress",
]
