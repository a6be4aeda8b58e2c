"""Domain values -> JSON-ready dicts for the API views."""
from .enquiries import next_statuses
from .inventory import stock_label, stock_status
from .pricing import discount_percent, effective_price, is_on_sale
from .ratings import average_rating, rating_breakdown
from .utils import money


def _dt(value):
    return value.isoformat() if value else None


def review_to_dict(review):
    return {
        "id": review.id,
        "author": review.author,
        "comment": review.comment,
        "rating": review.rating,
        "created_at": _dt(review.created_at),
    }


def option_to_dict(option):
    data = {"id": option.id, "kind": str(option.kind), "name": option.name}
    if hasattr(option, "color_code"):
        data["color_code"] = option.color_code
    if hasattr(option, "image"):
        data["image"] = option.image
    return data


def product_to_dict(product, detail=False):
    data = {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "price": money(product.price),
        "effective_price": money(effective_price(product)),
        "discount_percent": discount_percent(product),
        "on_sale": is_on_sale(product),
        "is_special": product.is_special,
        "special_price": money(product.special_price),
        "is_featured": product.is_featured,
        "stock": product.stock,
        "stock_status": str(stock_status(product)),
        "stock_label": stock_label(product),
        "images": list(product.images),
        "average_rating": average_rating(product.reviews),
        "review_count": len(product.reviews),
        "fabrics": [option_to_dict(o) for o in product.fabrics],
        "colors": [option_to_dict(o) for o in product.colors],
        "sizes": [option_to_dict(o) for o in product.sizes],
        "created_at": _dt(product.created_at),
    }
    if detail:
        data["reviews"] = [review_to_dict(r) for r in product.reviews]
        data["rating_breakdown"] = {str(k): v for k, v in rating_breakdown(product.reviews).items()}
    return data


def enquiry_to_dict(enquiry, transitions=None):
    kwargs = {} if transitions is None else {"transitions": transitions}
    return {
        "id": enquiry.id,
        "product_id": enquiry.product_id,
        "product_name": enquiry.product_name,
        "customer_name": enquiry.customer_name,
        "customer_email": enquiry.customer_email,
        "customer_phone": enquiry.customer_phone,
        "message": enquiry.message,
        "fabric": enquiry.fabric,
        "color": enquiry.color,
        "status": str(enquiry.status),
        "next_statuses": [str(s) for s in next_statuses(enquiry.status, **kwargs)],
        "created_at": _dt(enquiry.created_at),
    }
