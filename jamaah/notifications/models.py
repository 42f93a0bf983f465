"""Data models for the notification ledger."""

from __future__ import annotations

from typing import Literal, TypedDict

NotificationType = Literal["approval", "info", "success", "warning"]
NOTIFICATION_TYPES = ("approval", "info", "success", "warning")


class _NotificationBase(TypedDict):
    id: str
    userId: str
    type: str
    title: str
    message: str
    read: bool
    createdAt: str


class Notification(_NotificationBase, total=False):
    """An in-app notification stored at ``notification:<userId>:<id>``."""

    memberId: str
