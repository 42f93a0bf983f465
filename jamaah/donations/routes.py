"""Routes for the donations blueprint."""

from flask import g, jsonify

from jamaah.auth.decorators import login_optional, login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .forms import CampaignForm, DonationForm
from .services import DonationService


@bp.route("/campaigns", methods=["GET"])
@translate_errors("Gagal memuat kampanye")
def list_campaigns():
    return jsonify(DonationService.list_campaigns(backend.store))


@bp.route("/campaigns", methods=["POST"])
@login_required(admin_required=True)
@translate_errors("Gagal membuat kampanye")
def create_campaign():
    form = CampaignForm.from_json()
    campaign = DonationService.create_campaign(backend.store, g.user["id"], form.data)
    return jsonify(campaign), 201


@bp.route("", methods=["POST"])
@login_optional
@translate_errors("Gagal membuat donasi")
def donate():
    """Pledge a donation; signing in is optional."""
    form = DonationForm.from_json()
    return jsonify(DonationService.donate(backend.store, g.user, form.data))
