"""Data models for the user blueprint."""

from __future__ import annotations

from typing import Any, TypedDict

ROLE_MEMBER = "Member"
ROLE_ADMIN = "Admin"
ROLES = (ROLE_MEMBER, ROLE_ADMIN)

PROFILE_STATUS_PENDING = "Pending"
PROFILE_STATUS_ACTIVE = "Active"


class _ProfileBase(TypedDict):
    id: str
    email: str | None
    name: str
    role: str
    member_since: Any
    wallet_balance: int


class UserProfile(_ProfileBase, total=False):
    """A profile stored at ``profile:<userId>``."""

    username: str
    phone: str
    address: str
    mosque: str
    avatar_url: str
    avatar_path: str
    status: str
    member_id: str


class PublicProfile(TypedDict, total=False):
    """The subset of a profile shown to other members."""

    id: str
    name: str
    username: str
    mosque: str
    avatar_url: str


class Connections(TypedDict):
    user_id: str
    list: list[str]


class Withdrawal(TypedDict):
    id: str
    user_id: str
    amount: int
    bank_account: str
    status: str
    created_at: int
