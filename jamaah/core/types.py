"""Core data types for the jamaah application."""

from typing import Any, Optional, TypedDict  # noqa: UP035


class KVRecord(TypedDict):
    """A document in the key-value collection."""

    key: str
    value: Any


class _IdentityBase(TypedDict):
    id: str
    email: Optional[str]  # noqa: UP007


class Identity(_IdentityBase, total=False):
    """The authenticated caller, resolved from a verified ID token."""

    name: Optional[str]  # noqa: UP007
    role: str
    status: str
    member_id: Optional[str]  # noqa: UP007
    created_at: Any
