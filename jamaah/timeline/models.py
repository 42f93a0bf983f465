"""Data models for the timeline."""

from __future__ import annotations

from typing import Any, TypedDict

POST_STATUS_PUBLISHED = "published"


class Comment(TypedDict):
    id: str
    user_id: str
    user_name: str
    text: str
    created_at: str


class _PostBase(TypedDict):
    id: str
    user_id: str
    user_name: str
    title: str
    content: str
    created_at: Any
    likes: list[str]
    comments: list[Comment]


class TimelinePost(_PostBase, total=False):
    """A post stored at ``timeline:<id>``.

    ``user_name`` is copied from the author's profile when the post is
    written and is not updated when the profile changes.
    """

    image: str | None
    status: str
    updated_at: str
