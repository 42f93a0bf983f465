"""Routes for the timeline blueprint."""

from flask import g, jsonify

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .forms import CommentForm, PostForm, PostUpdateForm
from .services import BookmarkService, TimelineService


@bp.route("", methods=["GET"])
@translate_errors("Gagal memuat timeline")
def list_posts():
    """List every post, newest first."""
    return jsonify(TimelineService.list(backend.store))


@bp.route("", methods=["POST"])
@login_required
@translate_errors("Gagal membuat postingan")
def create_post():
    form = PostForm.from_json()
    post = TimelineService.create(backend.store, g.user, form.data)
    return jsonify(post), 201


@bp.route("/bookmarks/list", methods=["GET"])
@login_required
@translate_errors("Gagal memuat bookmark")
def list_bookmarks():
    return jsonify(BookmarkService.list_posts(backend.store, g.user["id"]))


@bp.route("/user/<string:user_id>", methods=["GET"])
@translate_errors("Gagal memuat timeline")
def list_user_posts(user_id):
    return jsonify(TimelineService.list_by_user(backend.store, user_id))


@bp.route("/<string:post_id>", methods=["GET"])
@translate_errors("Gagal memuat postingan")
def get_post(post_id):
    return jsonify(TimelineService.get(backend.store, post_id))


@bp.route("/<string:post_id>", methods=["PUT"])
@login_required
@translate_errors("Gagal memperbarui postingan")
def update_post(post_id):
    """Owner-only partial update."""
    form = PostUpdateForm.from_json()
    post = TimelineService.update(
        backend.store, post_id, g.user["id"], form.provided_data()
    )
    return jsonify(post)


@bp.route("/<string:post_id>", methods=["DELETE"])
@login_required
@translate_errors("Gagal menghapus postingan")
def delete_post(post_id):
    TimelineService.delete(backend.store, post_id, g.user["id"])
    return jsonify({"success": True, "message": "Postingan dihapus"})


@bp.route("/<string:post_id>/like", methods=["POST"])
@login_required
@translate_errors("Gagal memperbarui like")
def toggle_like(post_id):
    return jsonify(TimelineService.toggle_like(backend.store, post_id, g.user["id"]))


@bp.route("/<string:post_id>/comment", methods=["POST"])
@login_required
@translate_errors("Gagal menambahkan komentar")
def add_comment(post_id):
    form = CommentForm.from_json()
    comment = TimelineService.add_comment(
        backend.store, post_id, g.user, form.text.data
    )
    return jsonify(comment), 201


@bp.route("/<string:post_id>/comment/<string:comment_id>", methods=["DELETE"])
@login_required
@translate_errors("Gagal menghapus komentar")
def delete_comment(post_id, comment_id):
    """Delete a comment as its author or as the post owner."""
    TimelineService.delete_comment(backend.store, post_id, comment_id, g.user["id"])
    return jsonify({"success": True, "message": "Komentar dihapus"})


@bp.route("/<string:post_id>/bookmark", methods=["POST"])
@login_required
@translate_errors("Gagal memperbarui bookmark")
def toggle_bookmark(post_id):
    return jsonify(BookmarkService.toggle(backend.store, post_id, g.user["id"]))
