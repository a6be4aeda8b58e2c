"""
Where a submitted enquiry or contact message goes.

The enquiry workflow calls ``send(draft)`` exactly once before recording
anything; contact messages go out through ``send_contact(message)``.
Anything that goes wrong on the way out is turned into a ChannelError.
"""
import logging
from typing import Protocol

import requests
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from .domain import ContactMessage, EnquiryDraft
from .exceptions import ChannelError
from .utils import render_to_pdf

logger = logging.getLogger(__name__)

EMAIL_TEMPLATE = "catalog_app/email_enquiry.html"
CONTACT_TEMPLATE = "catalog_app/email_contact.html"


class EnquiryChannel(Protocol):
    def send(self, draft: EnquiryDraft) -> None:
        ...

    def send_contact(self, message: ContactMessage) -> None:
        ...


class EmailEnquiryChannel:
    """Mail the enquiry to staff, copying the customer, with a PDF summary."""

    def __init__(self, recipients=None, from_email=None, attach_pdf=None):
        self.recipients = list(recipients if recipients is not None else settings.ENQUIRY_RECIPIENTS)
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.attach_pdf = settings.ENQUIRY_ATTACH_PDF if attach_pdf is None else attach_pdf

    def send(self, draft):
        context = {"enquiry": draft}
        try:
            html_message = render_to_string(EMAIL_TEMPLATE, context)
            plain_message = strip_tags(html_message)

            recipients = list(self.recipients)
            if draft.customer_email and draft.customer_email not in recipients:
                recipients.append(draft.customer_email)

            email_msg = EmailMultiAlternatives(
                subject=f"New enquiry for {draft.product_name} from {draft.customer_name}",
                body=plain_message,
                from_email=self.from_email,
                to=recipients,
                reply_to=[draft.customer_email],
            )
            email_msg.attach_alternative(html_message, "text/html")

            if self.attach_pdf:
                pdf_bytes = render_to_pdf(EMAIL_TEMPLATE, context)
                if pdf_bytes:
                    email_msg.attach("Enquiry_Summary.pdf", pdf_bytes, "application/pdf")

            email_msg.send(fail_silently=False)
        except Exception as e:
            logger.error(f"Error sending enquiry email for {draft.product_id}: {e}")
            raise ChannelError("Failed to send your enquiry. Please try again later.") from e
        logger.info(f"Enquiry email sent for {draft.product_id} to {len(recipients)} recipient(s)")

    def send_contact(self, message):
        try:
            html_message = render_to_string(CONTACT_TEMPLATE, {"contact": message})
            email_msg = EmailMultiAlternatives(
                subject=f"Contact form: {message.subject}",
                body=strip_tags(html_message),
                from_email=self.from_email,
                to=list(self.recipients),
                reply_to=[message.email],
            )
            email_msg.attach_alternative(html_message, "text/html")
            email_msg.send(fail_silently=False)
        except Exception as e:
            logger.error(f"Error sending contact email from {message.email}: {e}")
            raise ChannelError("Failed to send your message. Please try again later.") from e


class WebhookEnquiryChannel:
    """POST the enquiry as JSON to a relay (CRM, chat bridge, mail relay...)."""

    def __init__(self, url=None, timeout=None, headers=None):
        self.url = (url if url is not None else settings.ENQUIRY_WEBHOOK_URL).strip()
        self.timeout = timeout if timeout is not None else settings.ENQUIRY_WEBHOOK_TIMEOUT
        self.headers = {"Content-Type": "application/json", **(headers or {})}

    def _post(self, payload):
        if not self.url:
            logger.error("ENQUIRY_WEBHOOK_URL is not configured")
            raise ChannelError("Enquiry relay is not configured.")
        try:
            res = requests.post(
                self.url, json=payload, headers=self.headers, timeout=self.timeout
            )
            res.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Enquiry relay request failed: {e}")
            raise ChannelError("Failed to send your enquiry. Please try again later.") from e
        return res

    def send(self, draft):
        res = self._post(draft.as_dict())
        logger.info(f"Enquiry relayed for {draft.product_id} ({res.status_code})")

    def send_contact(self, message):
        res = self._post({"type": "contact", **message.as_dict()})
        logger.info(f"Contact message relayed from {message.email} ({res.status_code})")


CHANNELS = {
    "email": EmailEnquiryChannel,
    "webhook": WebhookEnquiryChannel,
}


def get_enquiry_channel(name=None):
    name = (name or settings.ENQUIRY_CHANNEL or "email").strip().lower()
    try:
        return CHANNELS[name]()
    except KeyError:
        raise ValueError(f"Unknown ENQUIRY_CHANNEL '{name}'. Expected one of: {', '.join(CHANNELS)}")
