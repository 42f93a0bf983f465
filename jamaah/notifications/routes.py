"""Routes for the notifications blueprint."""

from flask import g, jsonify

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .services import NotificationLedger


@bp.route("", methods=["GET"])
@login_required
@translate_errors("Gagal memuat notifikasi")
def list_notifications():
    """List the caller's notifications, newest first."""
    return jsonify(NotificationLedger.list(backend.store, g.user["id"]))


@bp.route("/<string:notification_id>/read", methods=["POST"])
@login_required
@translate_errors("Gagal memperbarui notifikasi")
def mark_read(notification_id):
    """Mark a single notification as read."""
    NotificationLedger.mark_read(backend.store, g.user["id"], notification_id)
    return jsonify({"success": True})


@bp.route("/read-all", methods=["POST"])
@login_required
@translate_errors("Gagal memperbarui notifikasi")
def mark_all_read():
    """Mark all of the caller's notifications as read."""
    updated = NotificationLedger.mark_all_read(backend.store, g.user["id"])
    return jsonify({"success": True, "updated": updated})
