"""Routes for the content blueprint."""

from flask import g, jsonify

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .forms import AnnouncementForm, ArticleCommentForm
from .services import ContentService


@bp.route("/announcements", methods=["GET"])
@translate_errors("Gagal memuat pengumuman")
def list_announcements():
    return jsonify(ContentService.list_announcements(backend.store))


@bp.route("/announcements", methods=["POST"])
@login_required(admin_required=True)
@translate_errors("Gagal membuat pengumuman")
def create_announcement():
    form = AnnouncementForm.from_json()
    announcement = ContentService.create_announcement(
        backend.store, g.user["id"], form.data
    )
    return jsonify(announcement), 201


@bp.route("/articles", methods=["GET"])
@translate_errors("Gagal memuat artikel")
def list_articles():
    return jsonify(ContentService.list_articles(backend.store))


@bp.route("/articles/<string:article_id>/comments", methods=["GET"])
@translate_errors("Gagal memuat komentar")
def list_article_comments(article_id):
    return jsonify(ContentService.list_comments(backend.store, article_id))


@bp.route("/articles/<string:article_id>/comments", methods=["POST"])
@login_required
@translate_errors("Gagal mengirim komentar")
def add_article_comment(article_id):
    form = ArticleCommentForm.from_json()
    comment = ContentService.add_comment(
        backend.store, g.user, article_id, form.text.data
    )
    return jsonify(comment), 201


@bp.route(
    "/articles/<string:article_id>/comments/<string:comment_id>", methods=["DELETE"]
)
@login_required
@translate_errors("Gagal menghapus komentar")
def delete_article_comment(article_id, comment_id):
    ContentService.delete_comment(backend.store, article_id, comment_id, g.user["id"])
    return jsonify({"success": True})
