"""Per-user append-only notification ledger.

Records only ever change by flipping ``read``; nothing is deleted. Listing is
a full prefix scan of the user's namespace on every call.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, Any

from jamaah.core.store import Repository
from jamaah.errors import NotFoundError, ValidationError
from jamaah.utils import now_iso, now_ms, sort_newest_first

from .models import NOTIFICATION_TYPES

if TYPE_CHECKING:
    from jamaah.core.store import KVStore

    from .models import Notification


class NotificationLedger:
    """Handles business logic and data access for notifications."""

    @staticmethod
    def _repo(store: KVStore, user_id: str) -> Repository[Notification]:
        return Repository(store, f"notification:{user_id}:")

    @staticmethod
    def new_id() -> str:
        return f"notif_{now_ms()}_{secrets.token_hex(4)}"

    @staticmethod
    def append(
        store: KVStore,
        user_id: str,
        type: str,
        title: str,
        message: str,
        **extra: Any,
    ) -> Notification:
        """Append a new unread notification for ``user_id``."""
        if type not in NOTIFICATION_TYPES:
            raise ValidationError(f"Tipe notifikasi tidak dikenal: {type}")
        notification_id = NotificationLedger.new_id()
        notification: Notification = {
            "id": notification_id,
            "userId": user_id,
            "type": type,
            "title": title,
            "message": message,
            "read": False,
            "createdAt": now_iso(),
            **extra,
        }
        return NotificationLedger._repo(store, user_id).put(
            notification_id, notification
        )

    @staticmethod
    def list(store: KVStore, user_id: str) -> list[Notification]:
        """All notifications of ``user_id``, newest first."""
        return sort_newest_first(
            NotificationLedger._repo(store, user_id).list(), "createdAt"
        )

    @staticmethod
    def unread_count(store: KVStore, user_id: str) -> int:
        return sum(1 for n in NotificationLedger.list(store, user_id) if not n.get("read"))

    @staticmethod
    def mark_read(store: KVStore, user_id: str, notification_id: str) -> Notification:
        """Flip one notification to read; repeating the call changes nothing."""
        repo = NotificationLedger._repo(store, user_id)
        notification = repo.get(notification_id)
        if not notification:
            raise NotFoundError("Notifikasi tidak ditemukan")
        if not notification.get("read"):
            notification = repo.put(notification_id, {**notification, "read": True})
        return notification

    @staticmethod
    def mark_all_read(store: KVStore, user_id: str) -> int:
        """Mark every unread notification read; returns how many changed."""
        repo = NotificationLedger._repo(store, user_id)
        changed = 0
        for notification in repo.list():
            if notification.get("read"):
                continue
            repo.put(notification["id"], {**notification, "read": True})
            changed += 1
        return changed
