"""The content blueprint: announcements, articles and article comments."""

from flask import Blueprint

bp = Blueprint("content", __name__, url_prefix="/api")

from . import routes  # noqa: E402
from .services import ContentService  # noqa: E402

__all__ = ["routes", "ContentService"]
