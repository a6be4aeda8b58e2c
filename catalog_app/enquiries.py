"""
Enquiry submission and the enquiry status state machine.

An enquiry is a request-to-purchase that staff follow up by hand. Visitors
submit one per product, staff move it along the status table below.
"""
import logging

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from .domain import EnquiryDraft, EnquiryForm, EnquiryStatus, VariantSelection
from .exceptions import InvalidTransition
from .variants import BlockReason, can_enquire, explain_block, unknown_options

logger = logging.getLogger(__name__)

# (from, to) pairs staff may apply. responded has no way out yet; adding
# (RESPONDED, COMPLETED) here is all it takes to open it up.
ENQUIRY_TRANSITIONS = frozenset({
    (EnquiryStatus.PENDING, EnquiryStatus.RESPONDED),
    (EnquiryStatus.PENDING, EnquiryStatus.COMPLETED),
})


def _check_status(value):
    if value not in EnquiryStatus.values:
        raise ValidationError({
            "status": f"Unknown status '{value}'. Expected one of: {', '.join(EnquiryStatus.values)}."
        })
    return EnquiryStatus(value)


def _coerce(value):
    return EnquiryStatus(value) if value in EnquiryStatus.values else value


def can_transition(current, new, transitions=ENQUIRY_TRANSITIONS):
    return (_coerce(current), _coerce(new)) in transitions


def next_statuses(current, transitions=ENQUIRY_TRANSITIONS):
    """Statuses staff may move an enquiry to from ``current``, in display order."""
    return [s for s in EnquiryStatus if can_transition(current, s, transitions)]


def transition(current, new, transitions=ENQUIRY_TRANSITIONS):
    current = _check_status(current)
    new = _check_status(new)
    if not can_transition(current, new, transitions):
        raise InvalidTransition(current, new)
    return new


def _as_form(form):
    if isinstance(form, EnquiryForm):
        return form
    form = form or {}
    return EnquiryForm(
        name=str(form.get("name") or ""),
        email=str(form.get("email") or ""),
        message=str(form.get("message") or ""),
        phone=str(form.get("phone") or "") or None,
    )


def _as_selection(selection):
    if isinstance(selection, VariantSelection):
        return selection
    selection = selection or {}
    return VariantSelection(
        fabric=selection.get("fabric") or None,
        color=selection.get("color") or None,
        size=selection.get("size") or None,
    )


def validate_submission(form, product, selection=None):
    """
    Check a visitor's enquiry against the product they are enquiring about.

    ``form`` and ``selection`` may be the dataclasses or plain dicts as
    posted. Returns an EnquiryDraft, or raises ValidationError keyed by the
    offending field.
    """
    form = _as_form(form)
    selection = _as_selection(selection)

    name = form.name.strip()
    email = form.email.strip()
    message = form.message.strip()
    phone = (form.phone or "").strip() or None

    errors = {}
    if not name:
        errors["name"] = "Please enter your name."
    if not email:
        errors["email"] = "Please enter your email address."
    else:
        try:
            validate_email(email)
        except ValidationError:
            errors["email"] = "Please enter a valid email address."
    if not message:
        errors["message"] = "Please enter a message."

    errors.update(unknown_options(product, selection))

    if not can_enquire(product, selection):
        reason = explain_block(product, selection)
        if reason in (BlockReason.NEEDS_FABRIC, BlockReason.NEEDS_BOTH):
            errors.setdefault("fabric", "Please select a fabric.")
        if reason in (BlockReason.NEEDS_COLOR, BlockReason.NEEDS_BOTH):
            errors.setdefault("color", "Please select a color.")

    if errors:
        raise ValidationError(errors)

    return EnquiryDraft(
        product_id=product.id,
        product_name=product.name,
        customer_name=name,
        customer_email=email,
        customer_phone=phone,
        message=message,
        fabric=selection.fabric,
        color=selection.color,
    )


class EnquiryWorkflow:
    """
    Glue between validation, the notification channel and the store.

    The channel is called once per submission. If it fails nothing is
    recorded and the ChannelError goes back to the caller.
    """

    def __init__(self, repository, channel, transitions=ENQUIRY_TRANSITIONS):
        self.repository = repository
        self.channel = channel
        self.transitions = transitions

    def submit(self, form, product, selection=None):
        draft = validate_submission(form, product, selection)
        self.channel.send(draft)
        enquiry = self.repository.create_enquiry(draft)
        logger.info(f"Enquiry {enquiry.id} recorded for product {product.id}")
        return enquiry

    def update_status(self, enquiry_id, new_status):
        enquiry = self.repository.get_enquiry(enquiry_id)
        new_status = transition(enquiry.status, new_status, self.transitions)
        updated = self.repository.update_enquiry_status(enquiry_id, new_status)
        logger.info(f"Enquiry {enquiry_id} moved from {enquiry.status} to {new_status}")
        return updated

    def allowed_statuses(self, enquiry):
        return next_statuses(enquiry.status, self.transitions)
