"""Service layer for events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jamaah.core.store import Repository
from jamaah.errors import NotFoundError
from jamaah.utils import new_id, now_ms, sort_oldest_first

if TYPE_CHECKING:
    from jamaah.core.store import KVStore

    from .models import Event


class EventService:
    """Handles business logic and data access for events."""

    @staticmethod
    def _repo(store: KVStore) -> Repository[Event]:
        return Repository(store, "event:")

    @staticmethod
    def list(store: KVStore) -> list[Event]:
        """All events, soonest first."""
        return sort_oldest_first(EventService._repo(store).list(), "date")

    @staticmethod
    def create(store: KVStore, user_id: str, data: dict[str, Any]) -> Event:
        event_id = new_id()
        event: Event = {
            "id": event_id,
            "title": data["title"],
            "category": data.get("category") or "Lainnya",
            "date": data["date"],
            "location": data.get("location") or "",
            "description": data.get("description") or "",
            "rsvp": [],
            "created_at": now_ms(),
            "created_by": user_id,
        }
        return EventService._repo(store).put(event_id, event)

    @staticmethod
    def rsvp(store: KVStore, event_id: str, user_id: str) -> Event:
        """Add ``user_id`` to the RSVP list once; repeats are no-ops."""
        repo = EventService._repo(store)
        event = repo.get(event_id)
        if not event:
            raise NotFoundError("Event tidak ditemukan")
        rsvp = list(event.get("rsvp") or [])
        if user_id not in rsvp:
            rsvp.append(user_id)
            event = repo.put(event_id, {**event, "rsvp": rsvp})
        return event
