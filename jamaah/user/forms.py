"""Forms for the user blueprint."""

from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, Regexp

from jamaah.forms import ApiForm


class ProfileForm(ApiForm):
    """Partial profile update."""

    name = StringField("Name", validators=[Optional(), Length(max=100)])
    username = StringField(
        "Username",
        validators=[
            Optional(),
            Length(min=3, max=30, message="Username harus 3-30 karakter"),
            Regexp(
                r"^[a-zA-Z0-9_]+$",
                message="Username hanya boleh mengandung huruf, angka, dan underscore",
            ),
        ],
    )
    phone = StringField("Phone", validators=[Optional(), Length(max=20)])
    address = StringField("Address", validators=[Optional(), Length(max=300)])
    mosque = StringField("Mosque", validators=[Optional(), Length(max=100)])


class AvatarForm(ApiForm):
    """A base64 encoded image, optionally as a data URL."""

    file = StringField(
        "File", validators=[DataRequired(message="File tidak ditemukan")]
    )
    fileType = StringField("File type", validators=[Optional(), Length(max=10)])


class ConnectionForm(ApiForm):
    user_id = StringField(
        "User", validators=[DataRequired(message="user_id required")]
    )


class WithdrawForm(ApiForm):
    amount = IntegerField(
        "Amount",
        validators=[
            DataRequired(message="Jumlah penarikan wajib diisi"),
            NumberRange(min=1, message="Jumlah penarikan tidak valid"),
        ],
    )
    bank_account = StringField(
        "Bank account",
        validators=[DataRequired(message="Rekening tujuan wajib diisi")],
    )
