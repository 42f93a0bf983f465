"""Accounts awaiting admin approval, stored at ``pending_user:<userId>``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jamaah.core.store import Repository
from jamaah.utils import sort_newest_first

if TYPE_CHECKING:
    from jamaah.core.store import KVStore

    from .models import PendingUser


def pending_users(store: KVStore) -> Repository[PendingUser]:
    return Repository(store, "pending_user:")


def list_pending(store: KVStore) -> list[PendingUser]:
    """Pending signups, newest first."""
    return sort_newest_first(pending_users(store).list(), "createdAt")
