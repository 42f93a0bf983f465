"""Service layer for one-to-one chats.

Messages live inside the chat record; sending one rewrites the whole chat,
so two messages sent at the same moment can overwrite each other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jamaah.core.store import Repository
from jamaah.errors import NotFoundError, ValidationError
from jamaah.user.services import ProfileService
from jamaah.utils import new_id, now_ms, sort_newest_first

if TYPE_CHECKING:
    from jamaah.core.identity import AuthProvider
    from jamaah.core.store import KVStore
    from jamaah.core.types import Identity

    from .models import Chat, Message


def chat_id_for(user_a: str, user_b: str) -> str:
    """Derive the chat id of a pair; argument order does not matter."""
    return ":".join(sorted((user_a, user_b)))


class ChatService:
    """Handles business logic and data access for chats."""

    @staticmethod
    def _repo(store: KVStore) -> Repository[Chat]:
        return Repository(store, "chat:")

    @staticmethod
    def list(store: KVStore, user_id: str) -> list[Chat]:
        """Chats the user takes part in, most recently active first."""
        chats = [
            c
            for c in ChatService._repo(store).list()
            if user_id in (c.get("participants") or [])
        ]
        return sort_newest_first(chats, "last_message_at")

    @staticmethod
    def get_for_participant(store: KVStore, chat_id: str, user_id: str) -> Chat:
        """Return the chat; non-participants get the same 404 as a missing chat."""
        chat = ChatService._repo(store).get(chat_id)
        if not chat or user_id not in (chat.get("participants") or []):
            raise NotFoundError("Chat tidak ditemukan")
        return chat

    @staticmethod
    def _new_message(sender_id: str, text: str) -> Message:
        return {"id": new_id(), "sender_id": sender_id, "text": text, "created_at": now_ms()}

    @staticmethod
    def start(
        store: KVStore,
        auth: AuthProvider,
        identity: Identity,
        recipient_id: str,
        product_id: str | None = None,
        message: str | None = None,
    ) -> Chat:
        """Open (or reopen) the chat with ``recipient_id``.

        Both participants' profiles are created on the way if missing.
        """
        user_id = identity["id"]
        if recipient_id == user_id:
            raise ValidationError("Tidak bisa memulai chat dengan diri sendiri")

        repo = ChatService._repo(store)
        chat_id = chat_id_for(user_id, recipient_id)
        chat = repo.get(chat_id)
        if chat is None:
            sender_profile = ProfileService.get_or_create(store, identity)
            recipient_profile = ProfileService.get_or_create_from_provider(
                store, auth, recipient_id
            )
            created_at = now_ms()
            chat = {
                "id": chat_id,
                "participants": [user_id, recipient_id],
                "participant_names": {
                    user_id: sender_profile["name"],
                    recipient_id: (recipient_profile or {}).get("name") or "User",
                },
                "product_id": product_id or None,
                "messages": [],
                "created_at": created_at,
                "last_message_at": created_at,
            }

        if message:
            new_message = ChatService._new_message(user_id, message)
            chat = {
                **chat,
                "messages": [*chat["messages"], new_message],
                "last_message_at": new_message["created_at"],
            }
        return repo.put(chat_id, chat)

    @staticmethod
    def messages(store: KVStore, chat_id: str, user_id: str) -> list[Message]:
        chat = ChatService.get_for_participant(store, chat_id, user_id)
        return chat.get("messages") or []

    @staticmethod
    def send(store: KVStore, chat_id: str, user_id: str, text: str) -> Message:
        chat = ChatService.get_for_participant(store, chat_id, user_id)
        message = ChatService._new_message(user_id, text)
        ChatService._repo(store).put(
            chat_id,
            {
                **chat,
                "messages": [*(chat.get("messages") or []), message],
                "last_message_at": message["created_at"],
            },
        )
        return message

    @staticmethod
    def delete(store: KVStore, chat_id: str, user_id: str) -> None:
        ChatService.get_for_participant(store, chat_id, user_id)
        ChatService._repo(store).delete(chat_id)
