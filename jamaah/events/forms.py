"""Forms for the events blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional

from jamaah.forms import ApiForm


class EventForm(ApiForm):
    title = StringField(
        "Title", validators=[DataRequired(message="Judul wajib diisi"), Length(max=200)]
    )
    category = StringField("Category", validators=[Optional(), Length(max=50)])
    date = StringField(
        "Date", validators=[DataRequired(message="Tanggal wajib diisi")]
    )
    location = StringField("Location", validators=[Optional(), Length(max=200)])
    description = StringField("Description", validators=[Optional(), Length(max=5000)])
