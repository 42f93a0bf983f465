"""Forms for the content blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional

from jamaah.forms import ApiForm


class AnnouncementForm(ApiForm):
    title = StringField(
        "Title",
        validators=[DataRequired(message="Judul dan konten wajib diisi"), Length(max=200)],
    )
    content = StringField(
        "Content",
        validators=[DataRequired(message="Judul dan konten wajib diisi"), Length(max=5000)],
    )
    image = StringField("Image", validators=[Optional(), Length(max=2048)])


class ArticleCommentForm(ApiForm):
    text = StringField(
        "Text",
        validators=[
            DataRequired(message="Komentar tidak boleh kosong"),
            Length(max=1000),
        ],
    )
