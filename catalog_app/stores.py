"""Django ORM implementation of the catalog repository."""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.forms.models import model_to_dict

from .domain import EnquiryStatus, OptionKind
from .exceptions import NotFoundError
from .forms import OPTION_FORMS, ProductForm, ReviewForm
from .models import Enquiry, Product, ProductColor, ProductFabric, ProductSize
from .ratings import validate_rating

logger = logging.getLogger(__name__)

OPTION_MODELS = [ProductFabric, ProductColor, ProductSize]


def _form_errors(form):
    return ValidationError(form.errors.as_data())


class DjangoCatalogRepository:

    def _products(self):
        return Product.objects.prefetch_related("reviews", "fabrics", "colors", "sizes")

    def _get_product_row(self, product_id):
        try:
            return Product.objects.get(pk=product_id)
        except (Product.DoesNotExist, ValidationError, ValueError):
            # a malformed uuid can't name a product either
            logger.warning(f"Product {product_id} not found")
            raise NotFoundError("Product", product_id)

    def _get_enquiry_row(self, enquiry_id):
        try:
            return Enquiry.objects.get(pk=enquiry_id)
        except (Enquiry.DoesNotExist, ValidationError, ValueError):
            logger.warning(f"Enquiry {enquiry_id} not found")
            raise NotFoundError("Enquiry", enquiry_id)

    ### Products ###
    def list_products(self):
        return [p.to_domain() for p in self._products()]

    def get_product(self, product_id):
        row = self._get_product_row(product_id)
        return self._products().get(pk=row.pk).to_domain()

    def create_product(self, data):
        form = ProductForm(data)
        if not form.is_valid():
            raise _form_errors(form)
        product = form.save()
        logger.info(f"Product {product.pk} created: {product.name}")
        return self.get_product(product.pk)

    def update_product(self, product_id, data):
        product = self._get_product_row(product_id)
        merged = model_to_dict(product, fields=ProductForm.Meta.fields)
        merged.update(data)
        form = ProductForm(merged, instance=product)
        if not form.is_valid():
            raise _form_errors(form)
        form.save()
        logger.info(f"Product {product.pk} updated")
        return self.get_product(product.pk)

    def delete_product(self, product_id):
        product = self._get_product_row(product_id)
        # options and reviews cascade; enquiries keep the product name
        product.delete()
        logger.info(f"Product {product_id} deleted")

    ### Variant options ###
    def add_variant_option(self, product_id, kind, data):
        if kind not in OPTION_FORMS:
            raise ValidationError({
                "kind": f"Unknown option kind '{kind}'. Expected one of: {', '.join(OptionKind.values)}."
            })
        product = self._get_product_row(product_id)
        form = OPTION_FORMS[kind](data)
        if not form.is_valid():
            raise _form_errors(form)
        option = form.save(commit=False)
        option.product = product
        option.save()
        return option.to_domain()

    def remove_variant_option(self, option_id):
        for model in OPTION_MODELS:
            try:
                deleted, _ = model.objects.filter(pk=option_id).delete()
            except (ValidationError, ValueError):
                break
            if deleted:
                return
        logger.warning(f"Variant option {option_id} not found")
        raise NotFoundError("Variant option", option_id)

    ### Reviews ###
    def create_review(self, product_id, author, comment, rating):
        product = self._get_product_row(product_id)
        validate_rating(rating)
        form = ReviewForm({"author": author, "comment": comment, "rating": rating})
        if not form.is_valid():
            raise _form_errors(form)
        review = form.save(commit=False)
        review.product = product
        review.save()
        return review.to_domain()

    ### Enquiries ###
    def list_enquiries(self, status=None):
        qs = Enquiry.objects.all()
        if status:
            qs = qs.filter(status=status)
        return [e.to_domain() for e in qs]

    def get_enquiry(self, enquiry_id):
        return self._get_enquiry_row(enquiry_id).to_domain()

    def create_enquiry(self, draft):
        product = Product.objects.filter(pk=draft.product_id).first()
        enquiry = Enquiry.objects.create(
            product=product,
            product_name=draft.product_name,
            customer_name=draft.customer_name,
            customer_email=draft.customer_email,
            customer_phone=draft.customer_phone,
            message=draft.message,
            selected_fabric=draft.fabric,
            selected_color=draft.color,
            status=EnquiryStatus.PENDING,
        )
        return enquiry.to_domain()

    def update_enquiry_status(self, enquiry_id, status):
        with transaction.atomic():
            enquiry = self._get_enquiry_row(enquiry_id)
            enquiry.status = status
            enquiry.save(update_fields=["status"])
        return enquiry.to_domain()
