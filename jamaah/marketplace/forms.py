"""Forms for the marketplace blueprint."""

from flask_wtf.file import FileAllowed, FileField, FileRequired, FileSize  # type: ignore
from wtforms import BooleanField, IntegerField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from jamaah.core.media import MAX_IMAGE_BYTES
from jamaah.forms import ApiForm, StringListField

RATING_RANGE_MESSAGE = "Rating harus antara 1-5"


class ProductForm(ApiForm):
    name = StringField(
        "Name",
        validators=[DataRequired(message="Nama produk wajib diisi"), Length(max=200)],
    )
    description = StringField("Description", validators=[Optional(), Length(max=5000)])
    price = IntegerField(
        "Price",
        validators=[
            NumberRange(min=0, message="Harga wajib diisi dan tidak boleh negatif"),
        ],
    )
    images = StringListField("Images")
    is_barter_allowed = BooleanField(
        "Barter", false_values=(False, "false", "0", "")
    )


class ProductImageForm(ApiForm):
    """Multipart upload of a single product image."""

    image = FileField(
        "Image",
        validators=[
            FileRequired(message="File gambar tidak ditemukan"),
            FileAllowed(
                ["jpg", "jpeg", "png", "webp"],
                "Format file harus JPG, PNG, atau WebP",
            ),
            FileSize(max_size=MAX_IMAGE_BYTES, message="Ukuran file maksimal 5MB"),
        ],
    )


class ReviewForm(ApiForm):
    rating = IntegerField(
        "Rating",
        validators=[
            DataRequired(message=RATING_RANGE_MESSAGE),
            NumberRange(min=1, max=5, message=RATING_RANGE_MESSAGE),
        ],
    )
    comment = StringField("Comment", validators=[Optional(), Length(max=2000)])
