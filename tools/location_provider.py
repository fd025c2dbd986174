"""Location collaborators used by the planner's "use current location" action."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests
from pydantic import BaseModel, ValidationError


LOGGER = logging.getLogger(__name__)


def format_coordinates(latitude: float, longitude: float) -> str:
    """Coordinate pair rendered to four decimal places."""

    return f"{latitude:.4f}, {longitude:.4f}"


class _GeoPayload(BaseModel):
    latitude: float
    longitude: float


class LocationProvider(ABC):
    """Abstract location provider interface."""

    @abstractmethod
    def resolve_location(self) -> Optional[str]:
        """Return a location string, or ``None`` when it cannot be determined."""


class IPGeolocationProvider(LocationProvider):
    """Approximate coordinates from an IP geolocation endpoint."""

    def __init__(self, url: str, timeout_seconds: float = 5.0) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds

    def resolve_location(self) -> Optional[str]:
        try:
            response = requests.get(self.url, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _GeoPayload.model_validate(response.json())
        except requests.RequestException as exc:
            LOGGER.warning("Geolocation lookup failed", exc_info=exc)
            return None
        except (ValueError, ValidationError) as exc:
            LOGGER.warning("Geolocation payload unusable", exc_info=exc)
            return None
        return format_coordinates(parsed.latitude, parsed.longitude)


class StaticLocationProvider(LocationProvider):
    """Deterministic provider for tests and offline runs."""

    def __init__(self, latitude: float | None = None, longitude: float | None = None) -> None:
        self.latitude = latitude
        self.longitude = longitude

    def resolve_location(self) -> Optional[str]:
        if self.latitude is None or self.longitude is None:
            return None
        return format_coordinates(self.latitude, self.longitude)


__all__ = [
    "LocationProvider",
    "IPGeolocationProvider",
    "StaticLocationProvider",
    "format_coordinates",
]
