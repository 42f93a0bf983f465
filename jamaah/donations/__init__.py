"""The donations blueprint."""

from flask import Blueprint

bp = Blueprint("donations", __name__, url_prefix="/api/donations")

from . import routes  # noqa: E402
from .services import DonationService  # noqa: E402

__all__ = ["routes", "DonationService"]
