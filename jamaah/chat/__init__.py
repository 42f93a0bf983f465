"""The chat blueprint: one-to-one conversations."""

from flask import Blueprint

bp = Blueprint("chat", __name__, url_prefix="/api/chats")

from . import routes  # noqa: E402
from .services import ChatService, chat_id_for  # noqa: E402

__all__ = ["routes", "ChatService", "chat_id_for"]
