"""Forms for the admin blueprint."""

from wtforms import StringField
from wtforms.validators import AnyOf, DataRequired, Length

from jamaah.forms import ApiForm
from jamaah.user.models import ROLES


class ApproveUserForm(ApiForm):
    userId = StringField(
        "User", validators=[DataRequired(message="userId wajib diisi")]
    )


class InvitationForm(ApiForm):
    code = StringField(
        "Code",
        validators=[
            DataRequired(message="Kode undangan wajib diisi"),
            Length(min=4, max=64, message="Kode undangan harus 4-64 karakter"),
        ],
    )


class RoleForm(ApiForm):
    role = StringField(
        "Role",
        validators=[
            DataRequired(message="Role wajib diisi"),
            AnyOf(ROLES, message="Role tidak valid"),
        ],
    )
