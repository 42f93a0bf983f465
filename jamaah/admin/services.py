"""Service layer for admin operations: approving members and managing roles."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, Any, TypedDict

from flask import current_app, render_template

from jamaah.core.identity import AuthProviderError
from jamaah.core.messaging import DeliveryError
from jamaah.errors import NotFoundError, UpstreamError
from jamaah.membership import member_ids, pending_users
from jamaah.membership.models import MEMBER_STATUS_APPROVED
from jamaah.notifications import NotificationLedger
from jamaah.user.models import PROFILE_STATUS_ACTIVE
from jamaah.user.services import ProfileService
from jamaah.utils import mask_email, now_iso

if TYPE_CHECKING:
    from jamaah.core.identity import AuthProvider
    from jamaah.core.messaging import NotificationSender, OutboundMessage
    from jamaah.core.store import KVStore
    from jamaah.membership.models import PendingUser

# Ambiguous characters (0/O, 1/l/I) are left out.
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789"
PASSWORD_LENGTH = 8

APPROVAL_TITLE = "🎉 Akun Anda Telah Disetujui!"
APPROVAL_MESSAGE = (
    "Selamat! Akun Anda telah disetujui oleh admin. Anda sekarang dapat login "
    "menggunakan password yang telah dikirimkan."
)


class Delivery(TypedDict, total=False):
    channel: str
    delivered: bool
    error: str


class ApprovalResult(TypedDict):
    userId: str
    email: str
    name: str
    memberId: str
    password: str
    whatsappMessage: str
    emailSubject: str
    emailBody: str
    delivery: list[Delivery]


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """Return a random password drawn from ``PASSWORD_ALPHABET``."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def render_approval_message(pending: PendingUser, password: str) -> OutboundMessage:
    """Render the email and WhatsApp bodies sent to an approved member."""
    context = {
        "app_name": current_app.config["APP_NAME"],
        "app_url": current_app.config["APP_URL"],
        "name": pending["name"],
        "email": pending["email"],
        "member_id": pending["memberId"],
        "password": password,
    }
    return {
        "subject": f"🎉 Akun {current_app.config['APP_NAME']} Anda Telah Disetujui",
        "email_body": render_template("email/account_approved.html", **context),
        "whatsapp_body": render_template("whatsapp/account_approved.txt", **context),
    }


class ApprovalService:
    """Moves a pending signup to an approved member."""

    @staticmethod
    def approve(
        store: KVStore,
        auth: AuthProvider,
        senders: list[NotificationSender],
        user_id: str,
    ) -> ApprovalResult:
        """Approve ``user_id`` and issue the real password.

        Once the PendingUser record is deleted there is no way back through
        this path. Message delivery happens last; a failed channel is
        reported in the result and never undoes the approval.

        Raises:
            NotFoundError: If there is no pending signup for ``user_id``.
            UpstreamError: If the auth provider rejects the update.
        """
        pending = pending_users(store).get(user_id)
        if not pending:
            raise NotFoundError("User tidak ditemukan")

        password = generate_password()
        approved_at = now_iso()
        try:
            auth.update_password(user_id, password)
            auth.update_claims(
                user_id,
                {
                    "memberId": pending["memberId"],
                    "status": MEMBER_STATUS_APPROVED,
                    "approvedAt": approved_at,
                },
            )
        except AuthProviderError as e:
            current_app.logger.error(f"Error updating user password: {e}")
            raise UpstreamError("Gagal memperbarui password") from e

        def approve_record(record: dict[str, Any] | None) -> dict[str, Any]:
            return {
                **(record or {"memberId": pending["memberId"], "userId": user_id}),
                "status": MEMBER_STATUS_APPROVED,
                "approvedAt": approved_at,
            }

        store.mutate(member_ids(store).key(pending["memberId"]), approve_record)

        NotificationLedger.append(
            store,
            user_id,
            "approval",
            APPROVAL_TITLE,
            APPROVAL_MESSAGE,
            memberId=pending["memberId"],
        )
        pending_users(store).delete(user_id)
        ProfileService.repo(store).update(
            user_id, lambda p: {**p, "status": PROFILE_STATUS_ACTIVE}
        )

        message = render_approval_message(pending, password)
        delivery = ApprovalService.deliver(senders, pending, message)

        current_app.logger.info(
            f"User approved successfully: {user_id} "
            f"({mask_email(pending['email'])}, {pending['memberId']})"
        )
        if not senders:
            current_app.logger.warning(
                f"No delivery channel configured; relay the password for "
                f"{pending['memberId']} manually: {password}"
            )

        return {
            "userId": user_id,
            "email": pending["email"],
            "name": pending["name"],
            "memberId": pending["memberId"],
            "password": password,
            "whatsappMessage": message["whatsapp_body"],
            "emailSubject": message["subject"],
            "emailBody": message["email_body"],
            "delivery": delivery,
        }

    @staticmethod
    def deliver(
        senders: list[NotificationSender],
        pending: PendingUser,
        message: OutboundMessage,
    ) -> list[Delivery]:
        """Send ``message`` through every channel and report the outcome."""
        recipient = {
            "name": pending["name"],
            "email": pending["email"],
            "phone": pending["phone"],
        }
        results: list[Delivery] = []
        for sender in senders:
            try:
                sender.send(recipient, message)
            except DeliveryError as e:
                current_app.logger.error(
                    f"Failed to deliver approval via {sender.channel}: {e}"
                )
                results.append(
                    {"channel": sender.channel, "delivered": False, "error": str(e)}
                )
            else:
                results.append({"channel": sender.channel, "delivered": True})
        return results


class AdminService:
    """Service class for admin-related operations."""

    @staticmethod
    def set_role(
        store: KVStore, auth: AuthProvider, user_id: str, role: str
    ) -> dict[str, Any]:
        """Change a member's role in the token claims and the stored profile."""
        if auth.get_user(user_id) is None:
            raise NotFoundError("User tidak ditemukan")
        try:
            claims = auth.update_claims(user_id, {"role": role})
        except AuthProviderError as e:
            raise UpstreamError("Gagal memperbarui role") from e
        ProfileService.repo(store).update(user_id, lambda p: {**p, "role": role})
        current_app.logger.info(f"Role of {user_id} set to {role}")
        return claims
