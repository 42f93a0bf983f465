"""Routes for the admin blueprint."""

from flask import jsonify

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend
from jamaah.membership import InvitationService, list_pending

from . import bp
from .forms import ApproveUserForm, InvitationForm, RoleForm
from .services import AdminService, ApprovalService


@bp.route("/approve-user", methods=["POST"])
@login_required(admin_required=True)
@translate_errors("Gagal menyetujui user")
def approve_user():
    """Approve a pending signup and return the issued credentials."""
    form = ApproveUserForm.from_json()
    result = ApprovalService.approve(
        backend.store, backend.auth, backend.senders, form.userId.data
    )
    return jsonify(
        {"success": True, "message": "User berhasil disetujui", "data": result}
    )


@bp.route("/pending-users", methods=["GET"])
@login_required(admin_required=True)
@translate_errors("Gagal memuat data pendaftar")
def pending_user_list():
    return jsonify(list_pending(backend.store))


@bp.route("/invitations", methods=["GET"])
@login_required(admin_required=True)
@translate_errors("Gagal memuat kode undangan")
def list_invitations():
    return jsonify(InvitationService.list(backend.store))


@bp.route("/invitations", methods=["POST"])
@login_required(admin_required=True)
@translate_errors("Gagal membuat kode undangan")
def create_invitation():
    form = InvitationForm.from_json()
    return jsonify(InvitationService.create(backend.store, form.code.data)), 201


@bp.route("/users/<string:user_id>/role", methods=["POST"])
@login_required(admin_required=True)
@translate_errors("Gagal memperbarui role")
def set_role(user_id):
    """Promote or demote a member."""
    form = RoleForm.from_json()
    AdminService.set_role(backend.store, backend.auth, user_id, form.role.data)
    return jsonify({"success": True, "role": form.role.data})
