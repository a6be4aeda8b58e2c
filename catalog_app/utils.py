# catalog_app/utils.py
import json
import logging
from decimal import Decimal
from io import BytesIO

from django.core.exceptions import ValidationError
from django.template.loader import render_to_string
from xhtml2pdf import pisa

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}


def render_to_pdf(template_src, context_dict=None):
    """
    Render a Django template into a PDF file.
    Returns raw PDF bytes if successful, else None.
    """
    html = render_to_string(template_src, context_dict or {})
    result = BytesIO()
    pdf = pisa.pisaDocument(BytesIO(html.encode("UTF-8")), result)
    if not pdf.err:
        return result.getvalue()
    logger.error(f"PDF rendering of {template_src} failed with {pdf.err} error(s)")
    return None


def parse_bool(value):
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in TRUE_VALUES


def load_json_body(request):
    """Decode a JSON object body, raising ValidationError when it isn't one."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ValidationError("Request body must be valid JSON.")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def money(value):
    """Decimal -> string with two places for JSON, None stays None."""
    if value is None:
        return None
    return str(Decimal(value).quantize(Decimal("0.01")))
