"""Data models for membership records."""

from __future__ import annotations

from typing import Any, TypedDict

MEMBER_STATUS_PENDING = "pending_approval"
MEMBER_STATUS_APPROVED = "approved"


class InvitationCode(TypedDict, total=False):
    """An invitation code created by an operator."""

    code: str
    valid: bool
    created_at: Any
    used_by: str


class PendingUser(TypedDict):
    """A signed-up account awaiting admin approval."""

    userId: str
    email: str
    name: str
    phone: str
    memberId: str
    invitationCode: str
    createdAt: str


class MemberIdRecord(TypedDict, total=False):
    """The mapping from a member ID to its account."""

    memberId: str
    userId: str
    email: str
    name: str
    phone: str
    status: str
    createdAt: str
    approvedAt: str
