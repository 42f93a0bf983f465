"""Forms for the auth blueprint."""

from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired, Email, Length

from jamaah.forms import ApiForm


class SignupForm(ApiForm):
    """Invitation-gated signup."""

    email = StringField(
        "Email",
        validators=[
            DataRequired(message="Email wajib diisi"),
            Email(message="Email tidak valid"),
        ],
    )
    name = StringField(
        "Name",
        validators=[DataRequired(message="Nama wajib diisi"), Length(max=100)],
    )
    phone = StringField(
        "Phone",
        validators=[DataRequired(message="Nomor telepon wajib diisi"), Length(max=20)],
    )
    invitationCode = StringField(
        "Invitation code",
        validators=[DataRequired(message="Kode undangan tidak valid"), Length(max=64)],
    )


class SignInForm(ApiForm):
    """Email and password sign-in."""

    email = StringField(
        "Email",
        validators=[
            DataRequired(message="Email wajib diisi"),
            Email(message="Email tidak valid"),
        ],
    )
    password = PasswordField(
        "Password", validators=[DataRequired(message="Password wajib diisi")]
    )
