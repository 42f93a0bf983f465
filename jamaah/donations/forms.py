"""Forms for the donations blueprint."""

from wtforms import BooleanField, IntegerField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from jamaah.forms import ApiForm


class CampaignForm(ApiForm):
    title = StringField(
        "Title", validators=[DataRequired(message="Judul wajib diisi"), Length(max=200)]
    )
    description = StringField("Description", validators=[Optional(), Length(max=5000)])
    target_amount = IntegerField(
        "Target",
        validators=[
            DataRequired(message="Target donasi wajib diisi"),
            NumberRange(min=1, message="Target donasi tidak valid"),
        ],
    )
    image = StringField("Image", validators=[Optional(), Length(max=2048)])
    category = StringField("Category", validators=[Optional(), Length(max=50)])
    deadline = StringField("Deadline", validators=[Optional()])


class DonationForm(ApiForm):
    campaign_id = StringField(
        "Campaign", validators=[DataRequired(message="Kampanye wajib dipilih")]
    )
    amount = IntegerField(
        "Amount",
        validators=[
            DataRequired(message="Jumlah donasi wajib diisi"),
            NumberRange(min=1, message="Jumlah donasi tidak valid"),
        ],
    )
    donor_name = StringField("Donor name", validators=[Optional(), Length(max=100)])
    is_anonymous = BooleanField("Anonymous", false_values=(False, "false", "0", ""))
