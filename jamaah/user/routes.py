"""Routes for the user blueprint."""

from flask import g, jsonify, request

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.errors import NotFoundError
from jamaah.extensions import backend

from . import bp
from .forms import AvatarForm, ConnectionForm, ProfileForm, WithdrawForm
from .services import ConnectionService, ProfileService, WalletService


@bp.route("/profile", methods=["GET"])
@login_required
@translate_errors("Gagal memuat profil")
def get_profile():
    """Return the caller's profile, creating it on first access."""
    return jsonify(ProfileService.get_or_create(backend.store, g.user))


@bp.route("/profile", methods=["PUT"])
@login_required
@translate_errors("Gagal memperbarui profil")
def update_profile():
    form = ProfileForm.from_json()
    profile = ProfileService.update(backend.store, g.user, form.provided_data())
    return jsonify(profile)


@bp.route("/profile/avatar", methods=["POST"])
@login_required
@translate_errors("Gagal mengunggah foto profil")
def upload_avatar():
    """Upload a new avatar and replace the previous one."""
    form = AvatarForm.from_json()
    url = ProfileService.set_avatar(
        backend.store, backend.media, g.user, form.file.data, form.fileType.data
    )
    return jsonify({"avatar_url": url})


@bp.route("/users/search", methods=["GET"])
@login_required
@translate_errors("Gagal mencari user")
def search_users():
    username = (request.args.get("username") or "").strip()
    return jsonify(ProfileService.search_by_username(backend.store, g.user["id"], username))


@bp.route("/users/<string:user_id>", methods=["GET"])
@translate_errors("Gagal memuat profil")
def public_profile(user_id):
    """Public view of another member."""
    profile = ProfileService.get_or_create_from_provider(
        backend.store, backend.auth, user_id
    )
    if profile is None:
        raise NotFoundError("User tidak ditemukan")
    return jsonify(ProfileService.public(profile))


@bp.route("/connections", methods=["GET"])
@login_required
@translate_errors("Gagal memuat koneksi")
def list_connections():
    return jsonify(ConnectionService.list(backend.store, g.user["id"]))


@bp.route("/connections", methods=["POST"])
@login_required
@translate_errors("Gagal menambahkan koneksi")
def add_connection():
    form = ConnectionForm.from_json()
    ConnectionService.add(backend.store, g.user["id"], form.user_id.data)
    return jsonify({"success": True}), 201


@bp.route("/wallet/withdraw", methods=["POST"])
@login_required
@translate_errors("Gagal memproses penarikan")
def withdraw():
    form = WithdrawForm.from_json()
    withdrawal = WalletService.withdraw(
        backend.store, g.user["id"], form.amount.data, form.bank_account.data
    )
    return jsonify({"success": True, "withdrawal": withdrawal})
