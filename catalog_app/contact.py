"""Messages sent from the contact page."""
import logging

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from .domain import ContactMessage

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "name": "Please enter your name.",
    "email": "Please enter your email address.",
    "subject": "Please enter a subject.",
    "message": "Please enter a message.",
}


def validate_contact(data):
    """Strip and check a posted contact form; raises ValidationError keyed by field."""
    data = data or {}
    cleaned = {field: str(data.get(field) or "").strip() for field in REQUIRED_FIELDS}

    errors = {field: msg for field, msg in REQUIRED_FIELDS.items() if not cleaned[field]}
    if "email" not in errors:
        try:
            validate_email(cleaned["email"])
        except ValidationError:
            errors["email"] = "Please enter a valid email address."
    if errors:
        raise ValidationError(errors)

    return ContactMessage(**cleaned)


def send_contact(data, channel):
    message = validate_contact(data)
    channel.send_contact(message)
    logger.info(f"Contact message from {message.email} sent: {message.subject}")
    return message
