"""Forms for the chat blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional

from jamaah.forms import ApiForm


class StartChatForm(ApiForm):
    recipient_id = StringField(
        "Recipient", validators=[DataRequired(message="Penerima wajib diisi")]
    )
    product_id = StringField("Product", validators=[Optional()])
    message = StringField("Message", validators=[Optional(), Length(max=2000)])


class MessageForm(ApiForm):
    text = StringField(
        "Text",
        validators=[DataRequired(message="Pesan tidak boleh kosong"), Length(max=2000)],
    )
