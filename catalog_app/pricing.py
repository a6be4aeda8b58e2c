from decimal import Decimal, ROUND_HALF_UP

from django.core.exceptions import ValidationError


def _has_special(product):
    return bool(product.is_special) and product.special_price is not None


def effective_price(product):
    """Price shown to the customer: the special price while a special is active."""
    if _has_special(product):
        return Decimal(product.special_price)
    return Decimal(product.price)


def discount_percent(product):
    """Whole-number discount of the special price against the base price, 0-100."""
    if not _has_special(product):
        return 0
    price = Decimal(product.price)
    if price <= 0:
        return 0
    pct = (1 - Decimal(product.special_price) / price) * 100
    pct = int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(100, pct))


def is_on_sale(product):
    return effective_price(product) < Decimal(product.price)


def validate_special_price(price, special_price):
    """
    A special price has to undercut the base price.
    Raises ValidationError on ``special_price`` otherwise.
    """
    if special_price is None or price is None:
        return
    if Decimal(special_price) >= Decimal(price):
        raise ValidationError({
            "special_price": "Special price must be lower than the regular price."
        })
