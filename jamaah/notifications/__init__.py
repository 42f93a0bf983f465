"""The notifications blueprint."""

from flask import Blueprint

bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")

from . import routes  # noqa: E402
from .services import NotificationLedger  # noqa: E402

__all__ = ["routes", "NotificationLedger"]
