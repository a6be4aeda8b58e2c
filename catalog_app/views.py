import logging
from functools import wraps

from django.contrib.admin.views.decorators import staff_member_required
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .channels import get_enquiry_channel
from .contact import send_contact
from .domain import VariantSelection
from .enquiries import EnquiryWorkflow
from .exceptions import ChannelError, InvalidTransition, NotFoundError
from .filters import apply_filters, distinct_categories
from .serializers import enquiry_to_dict, option_to_dict, product_to_dict, review_to_dict
from .stores import DjangoCatalogRepository
from .utils import load_json_body, parse_bool
from .variants import can_enquire, explain_block, unknown_options

logger = logging.getLogger(__name__)


def get_repository():
    return DjangoCatalogRepository()


def get_workflow(repository=None):
    return EnquiryWorkflow(repository or get_repository(), get_enquiry_channel())


def _validation_errors(e):
    if hasattr(e, "error_dict"):
        return e.message_dict
    return {"__all__": e.messages}


def api_view(view):
    """Turn catalog errors into JSON responses with the matching status code."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except ValidationError as e:
            return JsonResponse({"errors": _validation_errors(e)}, status=400)
        except NotFoundError as e:
            return JsonResponse({"error": str(e)}, status=404)
        except InvalidTransition as e:
            return JsonResponse({
                "error": str(e),
                "current": str(e.current),
                "requested": str(e.requested),
            }, status=409)
        except ChannelError as e:
            logger.error(f"Error in {view.__name__}: {e}")
            return JsonResponse({"error": "We couldn't send your message right now. Please try again later."}, status=503)
    return wrapper


def _selection_from(data):
    return VariantSelection(
        fabric=data.get("fabric") or None,
        color=data.get("color") or None,
        size=data.get("size") or None,
    )


### Public catalog ###
@require_http_methods(["GET"])
@api_view
def product_list(request):
    products = get_repository().list_products()
    filtered = apply_filters(
        products,
        category=request.GET.get("category") or None,
        sale=parse_bool(request.GET.get("sale")),
        query=request.GET.get("q") or None,
        featured=parse_bool(request.GET.get("featured")),
    )
    return JsonResponse({
        "count": len(filtered),
        "categories": distinct_categories(products),
        "products": [product_to_dict(p) for p in filtered],
    })


@require_http_methods(["GET"])
@api_view
def product_detail(request, product_id):
    product = get_repository().get_product(product_id)
    return JsonResponse(product_to_dict(product, detail=True))


@csrf_exempt
@require_http_methods(["POST"])
@api_view
def product_reviews(request, product_id):
    data = load_json_body(request)
    review = get_repository().create_review(
        product_id,
        author=data.get("author"),
        comment=data.get("comment"),
        rating=data.get("rating"),
    )
    return JsonResponse(review_to_dict(review), status=201)


@csrf_exempt
@require_http_methods(["POST"])
@api_view
def product_selection(request, product_id):
    """Tell the enquiry form whether the current selection is complete."""
    product = get_repository().get_product(product_id)
    selection = _selection_from(load_json_body(request))
    return JsonResponse({
        "can_enquire": can_enquire(product, selection),
        "block": str(explain_block(product, selection)),
        "message": explain_block(product, selection).label,
        "unknown": unknown_options(product, selection),
    })


@csrf_exempt
@require_http_methods(["POST"])
@api_view
def product_enquiry(request, product_id):
    data = load_json_body(request)
    repository = get_repository()
    product = repository.get_product(product_id)
    workflow = get_workflow(repository)
    enquiry = workflow.submit(data, product, _selection_from(data))
    return JsonResponse({
        "id": enquiry.id,
        "status": str(enquiry.status),
        "message": "Enquiry sent successfully! We'll get back to you soon.",
    }, status=201)


@csrf_exempt
@require_http_methods(["POST"])
@api_view
def contact(request):
    send_contact(load_json_body(request), get_enquiry_channel())
    return JsonResponse({
        "sent": True,
        "message": "Thank you for reaching out. We'll get back to you soon.",
    }, status=201)


### Staff ###
@staff_member_required
@require_http_methods(["POST"])
@api_view
def manage_products(request):
    product = get_repository().create_product(load_json_body(request))
    return JsonResponse(product_to_dict(product, detail=True), status=201)


@staff_member_required
@require_http_methods(["PUT", "PATCH", "DELETE"])
@api_view
def manage_product(request, product_id):
    repository = get_repository()
    if request.method == "DELETE":
        repository.delete_product(product_id)
        return JsonResponse({"deleted": True})
    product = repository.update_product(product_id, load_json_body(request))
    return JsonResponse(product_to_dict(product, detail=True))


@staff_member_required
@require_http_methods(["POST"])
@api_view
def manage_product_options(request, product_id, kind):
    option = get_repository().add_variant_option(product_id, kind, load_json_body(request))
    return JsonResponse(option_to_dict(option), status=201)


@staff_member_required
@require_http_methods(["DELETE"])
@api_view
def manage_option(request, option_id):
    get_repository().remove_variant_option(option_id)
    return JsonResponse({"deleted": True})


@staff_member_required
@require_http_methods(["GET"])
@api_view
def manage_enquiries(request):
    status = (request.GET.get("status") or "").strip() or None
    enquiries = get_repository().list_enquiries(status=status)
    return JsonResponse({
        "count": len(enquiries),
        "enquiries": [enquiry_to_dict(e) for e in enquiries],
    })


@staff_member_required
@require_http_methods(["POST"])
@api_view
def manage_enquiry_status(request, enquiry_id):
    data = load_json_body(request)
    workflow = get_workflow()
    enquiry = workflow.update_status(enquiry_id, data.get("status"))
    return JsonResponse(enquiry_to_dict(enquiry, transitions=workflow.transitions))
