"""Utility functions for the application."""

from __future__ import annotations

import datetime
import time
import uuid
from typing import Any


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return (
        datetime.datetime.now(datetime.timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def new_id() -> str:
    return str(uuid.uuid4())


def display_name(
    identity: dict[str, Any], profile: dict[str, Any] | None = None, default: str = "User"
) -> str:
    """Return the name to snapshot on records authored by ``identity``.

    Prefers the stored profile name, then the token name, then the local
    part of the email address.
    """
    if profile and profile.get("name"):
        return profile["name"]
    if identity.get("name"):
        return identity["name"]
    email = identity.get("email") or ""
    if email:
        return email.split("@")[0]
    return default


def mask_email(email: str) -> str:
    """Mask an email address, e.g. a***@example.com."""
    if not email or "@" not in email:
        return email
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"


def to_epoch_ms(value: Any) -> int:
    """Convert an epoch-ms number or an ISO-8601 string to epoch ms.

    Records written at different times carry either form; unparseable
    values count as 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    try:
        parsed = datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return int(parsed.timestamp() * 1000)


def sort_newest_first(records: list[dict[str, Any]], field: str) -> list[dict[str, Any]]:
    """Sort records by the timestamp in ``field``, newest first."""
    return sorted(records, key=lambda r: to_epoch_ms(r.get(field)), reverse=True)


def sort_oldest_first(records: list[dict[str, Any]], field: str) -> list[dict[str, Any]]:
    return sorted(records, key=lambda r: to_epoch_ms(r.get(field)))


def iso_from_ms(timestamp_ms: int) -> str:
    """Format epoch milliseconds the way ``now_iso`` does."""
    return (
        datetime.datetime.fromtimestamp(timestamp_ms / 1000, datetime.timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
