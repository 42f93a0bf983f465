"""Human-readable member IDs of the form ``JMH-XXXXXX``."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from jamaah.core.store import Repository
from jamaah.utils import now_ms

if TYPE_CHECKING:
    from jamaah.core.store import KVStore

    from .models import MemberIdRecord

MEMBER_ID_PREFIX = "JMH-"
MEMBER_ID_SPACE = 1_000_000


def member_ids(store: KVStore) -> Repository[MemberIdRecord]:
    return Repository(store, "member_id:")


def format_member_id(number: int) -> str:
    return f"{MEMBER_ID_PREFIX}{number % MEMBER_ID_SPACE:06d}"


def issue_member_id(store: KVStore, timestamp_ms: int | None = None) -> str:
    """Derive a member ID from the current time.

    If a record already exists for the first candidate, the timestamp is
    shifted by a random offset and that second candidate is returned without
    another lookup, so uniqueness is best effort only.
    """
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    member_id = format_member_id(timestamp_ms)
    if member_ids(store).exists(member_id):
        offset = random.randint(1, 999)  # nosec B311
        return format_member_id(timestamp_ms + offset)
    return member_id
