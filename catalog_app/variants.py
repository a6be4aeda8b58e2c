import re

from django.core.exceptions import ValidationError
from django.db import models

COLOR_CODE_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class BlockReason(models.TextChoices):
    NONE = "none", "Ready to enquire"
    NEEDS_FABRIC = "needs-fabric", "Please select a fabric"
    NEEDS_COLOR = "needs-color", "Please select a color"
    NEEDS_BOTH = "needs-both", "Please select a fabric and a color"


def fabric_required(product):
    return len(product.fabrics) > 0


def color_required(product):
    return len(product.colors) > 0


def _missing(product, selection):
    missing_fabric = fabric_required(product) and not selection.fabric
    missing_color = color_required(product) and not selection.color
    return missing_fabric, missing_color


def can_enquire(product, selection):
    """
    Fabrics and colors have to be picked when the product offers them.
    Sizes are informational and never block an enquiry.
    """
    missing_fabric, missing_color = _missing(product, selection)
    return not missing_fabric and not missing_color


def explain_block(product, selection):
    missing_fabric, missing_color = _missing(product, selection)
    if missing_fabric and missing_color:
        return BlockReason.NEEDS_BOTH
    if missing_fabric:
        return BlockReason.NEEDS_FABRIC
    if missing_color:
        return BlockReason.NEEDS_COLOR
    return BlockReason.NONE


def unknown_options(product, selection):
    """Field -> message for every selected option the product does not offer."""
    errors = {}
    checks = [
        ("fabric", selection.fabric, product.fabrics),
        ("color", selection.color, product.colors),
        ("size", selection.size, product.sizes),
    ]
    for field, chosen, options in checks:
        if chosen and chosen not in [o.name for o in options]:
            errors[field] = f"'{chosen}' is not available for {product.name}."
    return errors


def validate_color_code(value):
    if not isinstance(value, str) or not COLOR_CODE_RE.fullmatch(value):
        raise ValidationError(
            "Color code must look like #A1B2C3.", code="invalid_color_code"
        )
