"""The timeline blueprint: posts, likes, comments and bookmarks."""

from flask import Blueprint

bp = Blueprint("timeline", __name__, url_prefix="/api/timeline")

from . import routes  # noqa: E402
from .services import TimelineService  # noqa: E402

__all__ = ["routes", "TimelineService"]
