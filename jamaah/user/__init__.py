"""The user blueprint: profiles, connections and the wallet."""

from flask import Blueprint

bp = Blueprint("user", __name__, url_prefix="/api")

from . import routes  # noqa: E402
from .services import ConnectionService, ProfileService, WalletService  # noqa: E402

__all__ = ["routes", "ConnectionService", "ProfileService", "WalletService"]
