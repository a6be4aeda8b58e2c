# catalog_app/forms.py
from django import forms
from django.core.exceptions import ValidationError

from .filters import ALL_CATEGORIES
from .models import Product, ProductColor, ProductFabric, ProductSize, Review
from .ratings import validate_rating


class ProductForm(forms.ModelForm):
    class Meta:
        model = Product
        fields = [
            "name", "description", "price", "category", "stock", "images",
            "is_special", "special_price", "is_featured",
        ]

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise ValidationError("Name is required.")
        return name

    def clean_description(self):
        return (self.cleaned_data.get("description") or "").strip() or None

    def clean_category(self):
        category = (self.cleaned_data.get("category") or "").strip()
        if not category:
            raise ValidationError("Category is required.")
        # "All" is the catalog filter's catch-all and can't name a real category
        if category.lower() == ALL_CATEGORIES.lower():
            raise ValidationError(f"'{ALL_CATEGORIES}' is reserved and can't be used as a category.")
        return category

    def clean_stock(self):
        stock = self.cleaned_data.get("stock")
        return 0 if stock is None else stock

    def clean_price(self):
        price = self.cleaned_data["price"]
        if price <= 0:
            raise ValidationError("Price must be greater than 0.")
        return price

    def clean_images(self):
        images = self.cleaned_data.get("images") or []
        if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
            raise ValidationError("Images must be a list of URLs.")
        return images

    # special_price < price is enforced by Product.clean(), which ModelForm
    # runs as part of is_valid()


class FabricForm(forms.ModelForm):
    class Meta:
        model = ProductFabric
        fields = ["name", "image"]


class ColorForm(forms.ModelForm):
    class Meta:
        model = ProductColor
        fields = ["name", "color_code"]


class SizeForm(forms.ModelForm):
    class Meta:
        model = ProductSize
        fields = ["name"]


OPTION_FORMS = {
    "fabric": FabricForm,
    "color": ColorForm,
    "size": SizeForm,
}


class ReviewForm(forms.ModelForm):
    rating = forms.IntegerField()

    class Meta:
        model = Review
        fields = ["author", "comment", "rating"]

    def clean_author(self):
        author = (self.cleaned_data.get("author") or "").strip()
        if not author:
            raise ValidationError("Please enter your name.")
        return author

    def clean_rating(self):
        try:
            return validate_rating(self.cleaned_data.get("rating"))
        except ValidationError as e:
            raise ValidationError(e.message_dict["rating"])
