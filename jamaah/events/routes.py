"""Routes for the events blueprint."""

from flask import g, jsonify

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .forms import EventForm
from .services import EventService


@bp.route("", methods=["GET"])
@translate_errors("Gagal memuat kegiatan")
def list_events():
    return jsonify(EventService.list(backend.store))


@bp.route("", methods=["POST"])
@login_required
@translate_errors("Gagal membuat kegiatan")
def create_event():
    form = EventForm.from_json()
    return jsonify(EventService.create(backend.store, g.user["id"], form.data)), 201


@bp.route("/<string:event_id>/rsvp", methods=["POST"])
@login_required
@translate_errors("Gagal RSVP")
def rsvp(event_id):
    """RSVP the caller to an event."""
    return jsonify(EventService.rsvp(backend.store, event_id, g.user["id"]))
