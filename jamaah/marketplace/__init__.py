"""The marketplace blueprint: products, product images and reviews."""

from flask import Blueprint

bp = Blueprint("marketplace", __name__, url_prefix="/api")

from . import routes  # noqa: E402
from .services import ProductService, ReviewService  # noqa: E402

__all__ = ["routes", "ProductService", "ReviewService"]
