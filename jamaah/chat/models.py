"""Data models for chats."""

from __future__ import annotations

from typing import TypedDict


class Message(TypedDict):
    id: str
    sender_id: str
    text: str
    created_at: int


class Chat(TypedDict):
    """A conversation stored at ``chat:<id>``.

    The id is the two participant ids sorted and joined with ``:``, so a
    pair of users never has more than one chat.
    """

    id: str
    participants: list[str]
    participant_names: dict[str, str]
    product_id: str | None
    messages: list[Message]
    created_at: int
    last_message_at: int
