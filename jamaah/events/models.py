"""Data models for events."""

from __future__ import annotations

from typing import Any, TypedDict


class Event(TypedDict):
    """A mosque event stored at ``event:<id>``."""

    id: str
    title: str
    category: str
    date: Any
    location: str
    description: str
    rsvp: list[str]
    created_at: int
    created_by: str
