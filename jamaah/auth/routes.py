"""Routes for the auth blueprint."""

from flask import current_app, g, jsonify

from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .decorators import login_required
from .forms import SignInForm, SignupForm
from .services import SignInService, SignupService


@bp.route("/signup", methods=["POST"])
@translate_errors("Gagal mendaftar")
def signup():
    """Register with an invitation code; the account waits for approval."""
    form = SignupForm.from_json()
    member_id = SignupService.submit(
        backend.store,
        backend.auth,
        form.data,
        single_use=current_app.config["INVITATION_SINGLE_USE"],
    )
    return jsonify(
        {
            "success": True,
            "message": "Pendaftaran berhasil. Menunggu persetujuan admin.",
            "memberId": member_id,
        }
    )


@bp.route("/signin", methods=["POST"])
@translate_errors("Gagal masuk")
def signin():
    """Sign in with email and password; pending accounts are turned away."""
    form = SignInForm.from_json()
    session = SignInService.sign_in(
        backend.store, backend.auth, form.email.data, form.password.data
    )
    return jsonify(session)


@bp.route("/signout", methods=["POST"])
@login_required
@translate_errors("Gagal keluar")
def signout():
    SignInService.sign_out(backend.auth, g.user["id"])
    return jsonify({"success": True})
