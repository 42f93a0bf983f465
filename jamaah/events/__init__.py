"""The events blueprint."""

from flask import Blueprint

bp = Blueprint("events", __name__, url_prefix="/api/events")

from . import routes  # noqa: E402
from .services import EventService  # noqa: E402

__all__ = ["routes", "EventService"]
