"""Routes for the chat blueprint."""

from flask import g, jsonify

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .forms import MessageForm, StartChatForm
from .services import ChatService


@bp.route("", methods=["GET"])
@login_required
@translate_errors("Gagal memuat pesan")
def list_chats():
    return jsonify(ChatService.list(backend.store, g.user["id"]))


@bp.route("", methods=["POST"])
@login_required
@translate_errors("Gagal memulai chat")
def start_chat():
    """Open the chat with another member, optionally sending a first message."""
    form = StartChatForm.from_json()
    chat = ChatService.start(
        backend.store,
        backend.auth,
        g.user,
        form.recipient_id.data,
        product_id=form.product_id.data,
        message=form.message.data,
    )
    return jsonify(chat)


@bp.route("/<string:chat_id>/messages", methods=["GET"])
@login_required
@translate_errors("Gagal memuat pesan")
def list_messages(chat_id):
    return jsonify(ChatService.messages(backend.store, chat_id, g.user["id"]))


@bp.route("/<string:chat_id>/messages", methods=["POST"])
@login_required
@translate_errors("Gagal mengirim pesan")
def send_message(chat_id):
    form = MessageForm.from_json()
    message = ChatService.send(backend.store, chat_id, g.user["id"], form.text.data)
    return jsonify(message), 201


@bp.route("/<string:chat_id>", methods=["DELETE"])
@login_required
@translate_errors("Gagal menghapus chat")
def delete_chat(chat_id):
    ChatService.delete(backend.store, chat_id, g.user["id"])
    return jsonify({"success": True, "message": "Chat berhasil dihapus"})
