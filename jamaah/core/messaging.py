"""Out-of-band delivery of account messages (email, WhatsApp)."""

from __future__ import annotations

import logging
import re
import smtplib
from typing import TYPE_CHECKING, Any, TypedDict

import requests
from flask_mail import Message

if TYPE_CHECKING:
    from flask_mail import Mail

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"
SMTP_AUTH_ERROR_CODE = 534


class OutboundMessage(TypedDict):
    """Pre-rendered message bodies for every channel."""

    subject: str
    email_body: str
    whatsapp_body: str


class Recipient(TypedDict, total=False):
    name: str
    email: str
    phone: str


class DeliveryError(Exception):
    """Raised when a channel fails to deliver a message."""

    pass


class NotificationSender:
    """Base class for delivery channels."""

    channel = "base"

    def send(self, recipient: Recipient, message: OutboundMessage) -> None:
        raise NotImplementedError


class EmailSender(NotificationSender):
    """Deliver the HTML body through Flask-Mail."""

    channel = "email"

    def __init__(self, mail: Mail, sender: str | None = None) -> None:
        self.mail = mail
        self.sender = sender

    def send(self, recipient: Recipient, message: OutboundMessage) -> None:
        """Send an email to a recipient.

        Raises:
            DeliveryError: If sending the email fails.
        """
        if not recipient.get("email"):
            raise DeliveryError("Recipient has no email address.")
        msg = Message(
            message["subject"],
            recipients=[recipient["email"]],
            html=message["email_body"],
            sender=self.sender,
        )
        try:
            self.mail.send(msg)
        except smtplib.SMTPAuthenticationError as e:
            if e.smtp_code == SMTP_AUTH_ERROR_CODE:
                raise DeliveryError(
                    "Authentication failed. Google requires you to use an App "
                    "Password. Please verify your MAIL_USERNAME and "
                    "MAIL_PASSWORD settings."
                ) from e
            raise DeliveryError(f"SMTP Authentication failed: {e}") from e
        except Exception as e:
            raise DeliveryError(f"Failed to send email: {e}") from e


def normalize_phone(phone: str, country_code: str = "62") -> str:
    """Return ``phone`` in E.164 form, treating a leading 0 as a local number."""
    digits = re.sub(r"[^\d+]", "", phone or "")
    if digits.startswith("+"):
        return digits
    if digits.startswith("0"):
        return f"+{country_code}{digits[1:]}"
    if digits.startswith(country_code):
        return f"+{digits}"
    return f"+{country_code}{digits}"


class WhatsAppSender(NotificationSender):
    """Deliver the WhatsApp body through the Twilio Messages API."""

    channel = "whatsapp"

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        timeout: float = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout
        self.http = session or requests.Session()

    def send(self, recipient: Recipient, message: OutboundMessage) -> None:
        if not recipient.get("phone"):
            raise DeliveryError("Recipient has no phone number.")
        try:
            response = self.http.post(
                TWILIO_MESSAGES_URL.format(sid=self.account_sid),
                auth=(self.account_sid, self.auth_token),
                data={
                    "From": f"whatsapp:{normalize_phone(self.from_number)}",
                    "To": f"whatsapp:{normalize_phone(recipient['phone'])}",
                    "Body": message["whatsapp_body"],
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise DeliveryError(f"Failed to send WhatsApp message: {e}") from e


def build_senders(config: Any, mail: Mail) -> list[NotificationSender]:
    """Instantiate the channels listed in ``NOTIFICATION_CHANNELS``."""
    channels = [
        c.strip().lower()
        for c in (config.get("NOTIFICATION_CHANNELS") or "").split(",")
        if c.strip()
    ]
    senders: list[NotificationSender] = []
    for channel in channels:
        if channel == "email":
            senders.append(EmailSender(mail, config.get("MAIL_DEFAULT_SENDER")))
        elif channel == "whatsapp":
            sid = config.get("TWILIO_ACCOUNT_SID")
            token = config.get("TWILIO_AUTH_TOKEN")
            number = config.get("TWILIO_WHATSAPP_NUMBER")
            if not (sid and token and number):
                logger.warning("WhatsApp channel enabled but Twilio is not configured.")
                continue
            senders.append(
                WhatsAppSender(
                    sid, token, number, timeout=config.get("HTTP_TIMEOUT", 10)
                )
            )
        else:
            logger.warning("Unknown notification channel: %s", channel)
    return senders
