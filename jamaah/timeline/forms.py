"""Forms for the timeline blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional

from jamaah.forms import ApiForm

TITLE_CONTENT_REQUIRED = "Judul dan konten wajib diisi"


class PostForm(ApiForm):
    title = StringField(
        "Title",
        validators=[DataRequired(message=TITLE_CONTENT_REQUIRED), Length(max=200)],
    )
    content = StringField(
        "Content",
        validators=[DataRequired(message=TITLE_CONTENT_REQUIRED), Length(max=5000)],
    )
    image = StringField("Image", validators=[Optional(), Length(max=2048)])


class PostUpdateForm(ApiForm):
    """Partial update; absent or empty fields keep their stored values.

    An explicit ``"image": null`` removes the image.
    """

    nullable_fields = ("image",)

    title = StringField("Title", validators=[Optional(), Length(max=200)])
    content = StringField("Content", validators=[Optional(), Length(max=5000)])
    image = StringField("Image", validators=[Optional(), Length(max=2048)])


class CommentForm(ApiForm):
    text = StringField(
        "Text",
        validators=[
            DataRequired(message="Komentar tidak boleh kosong"),
            Length(max=1000),
        ],
    )
