"""Invitation codes, member-ID issuance and pending signups."""

from .invitations import InvitationService
from .member_ids import issue_member_id, member_ids
from .pending import list_pending, pending_users

__all__ = [
    "InvitationService",
    "issue_member_id",
    "list_pending",
    "member_ids",
    "pending_users",
]
