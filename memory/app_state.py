"""In-memory application state owned by the root shell."""
from __future__ import annotations

import threading
import time
from typing import Callable, Iterable, List, Optional

from models.calendar_event import CalendarEvent, events_for_date
from models.taxonomy import ClothingCategory, Occasion
from models.wardrobe_item import WardrobeItem


def _millisecond_id() -> str:
    return str(int(time.time() * 1000))


class WardrobeState:
    """Authoritative wardrobe and agenda for the lifetime of the process.

    Only the explicit mutation methods change state; readers get copies so a
    recommendation's inventory snapshot cannot drift underneath it. Requests
    are served from a thread pool, so every read and write holds ``_lock``
    and id allocation happens in the same critical section as the append.
    """

    def __init__(
        self,
        inventory: Iterable[WardrobeItem] | None = None,
        events: Iterable[CalendarEvent] | None = None,
        id_factory: Callable[[], str] = _millisecond_id,
    ) -> None:
        self._lock = threading.RLock()
        self._inventory: List[WardrobeItem] = []
        self._events: List[CalendarEvent] = []
        self._id_factory = id_factory
        for item in inventory or []:
            self.add_item(item)
        for event in events or []:
            self.add_event(event)

    @property
    def inventory(self) -> List[WardrobeItem]:
        with self._lock:
            return list(self._inventory)

    @property
    def events(self) -> List[CalendarEvent]:
        with self._lock:
            return list(self._events)

    def get_item(self, item_id: str) -> Optional[WardrobeItem]:
        with self._lock:
            for item in self._inventory:
                if item.id == item_id:
                    return item
        return None

    def new_id(self) -> str:
        """Time-based id, bumped until it is free in both collections.

        The id is only reserved once something is stored under it; callers
        that need both should use :meth:`simulate_upload` or
        :meth:`create_event`, which allocate and append under one lock.
        """

        with self._lock:
            candidate = self._id_factory()
            taken = {item.id for item in self._inventory} | {event.id for event in self._events}
            while candidate in taken:
                candidate = str(int(candidate) + 1) if candidate.isdigit() else f"{candidate}-1"
            return candidate

    def add_item(self, item: WardrobeItem) -> WardrobeItem:
        with self._lock:
            if self.get_item(item.id) is not None:
                raise ValueError(f"Wardrobe item {item.id} already exists")
            self._inventory.append(item)
        return item

    def create_item(
        self,
        category: "str | ClothingCategory",
        name: str,
        color: str,
        image_url: str,
        tags: Iterable[str] = (),
        brand: Optional[str] = None,
        item_id: Optional[str] = None,
    ) -> WardrobeItem:
        """Build and append an item, allocating an id when none is given."""

        with self._lock:
            item = WardrobeItem(
                id=item_id or self.new_id(),
                category=category,
                name=name,
                color=color,
                image_url=image_url,
                tags=tags,
                brand=brand,
            )
            return self.add_item(item)

    def simulate_upload(self) -> WardrobeItem:
        """Append a placeholder item standing in for a photo upload."""

        with self._lock:
            item_id = self.new_id()
            item = WardrobeItem(
                id=item_id,
                category=ClothingCategory.TOP,
                name=f"New Item {len(self._inventory) + 1}",
                color="Black",
                image_url=f"https://picsum.photos/200/200?random={item_id}",
                tags=("new", "untagged"),
            )
            return self.add_item(item)

    def add_event(self, event: CalendarEvent) -> CalendarEvent:
        with self._lock:
            if any(existing.id == event.id for existing in self._events):
                raise ValueError(f"Calendar event {event.id} already exists")
            self._events.append(event)
        return event

    def create_event(
        self, title: str, date: str, time_label: str = "TBD", occasion: Occasion = Occasion.CASUAL
    ) -> CalendarEvent:
        if not title.strip():
            raise ValueError("Event title is required")
        with self._lock:
            event = CalendarEvent(id=self.new_id(), date=date, time=time_label, title=title.strip(), type=occasion)
            return self.add_event(event)

    def remove_event(self, event_id: str) -> bool:
        """Delete by id. Returns whether anything was removed."""

        with self._lock:
            remaining = [event for event in self._events if event.id != event_id]
            removed = len(remaining) != len(self._events)
            self._events = remaining
        return removed

    def replace_events(self, events: Iterable[CalendarEvent]) -> None:
        incoming = list(events)
        with self._lock:
            self._events = []
            for event in incoming:
                self.add_event(event)

    def events_for(self, target_date: str) -> List[CalendarEvent]:
        with self._lock:
            return events_for_date(self._events, target_date)


__all__ = ["WardrobeState"]
