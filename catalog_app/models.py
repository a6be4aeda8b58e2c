import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from . import domain
from .domain import EnquiryStatus
from .pricing import validate_special_price
from .variants import validate_color_code


class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    category = models.CharField(max_length=100, db_index=True)
    stock = models.PositiveIntegerField(default=0, blank=True)
    images = models.JSONField(default=list, blank=True)
    is_special = models.BooleanField(default=False)
    special_price = models.DecimalField(
        max_digits=10, decimal_places=2, blank=True, null=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    is_featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name

    def clean(self):
        validate_special_price(self.price, self.special_price)

    def to_domain(self):
        # prefetched relations come back through .all() without extra queries
        return domain.Product(
            id=str(self.id),
            name=self.name,
            description=self.description,
            price=self.price,
            category=self.category,
            stock=self.stock,
            images=tuple(self.images or ()),
            is_special=self.is_special,
            special_price=self.special_price,
            is_featured=self.is_featured,
            created_at=self.created_at,
            reviews=tuple(r.to_domain() for r in self.reviews.all()),
            fabrics=tuple(f.to_domain() for f in self.fabrics.all()),
            colors=tuple(c.to_domain() for c in self.colors.all()),
            sizes=tuple(s.to_domain() for s in self.sizes.all()),
        )


class ProductFabric(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="fabrics")
    name = models.CharField(max_length=100)
    image = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.name} ({self.product.name})"

    def to_domain(self):
        return domain.FabricOption(id=str(self.id), name=self.name, image=self.image or None)


class ProductColor(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="colors")
    name = models.CharField(max_length=100)
    color_code = models.CharField(max_length=7, validators=[validate_color_code])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.name} {self.color_code} ({self.product.name})"

    def to_domain(self):
        return domain.ColorOption(id=str(self.id), name=self.name, color_code=self.color_code)


class ProductSize(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="sizes")
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.name} ({self.product.name})"

    def to_domain(self):
        return domain.SizeOption(id=str(self.id), name=self.name)


class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="reviews")
    author = models.CharField(max_length=100)
    comment = models.TextField(blank=True, null=True)
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.rating}/5 by {self.author} for {self.product.name}"

    def to_domain(self):
        return domain.Review(
            id=str(self.id),
            author=self.author,
            comment=self.comment,
            rating=self.rating,
            created_at=self.created_at,
        )


class Enquiry(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(
        Product, on_delete=models.SET_NULL, null=True, blank=True, related_name="enquiries"
    )
    product_name = models.CharField(max_length=200)
    customer_name = models.CharField(max_length=200)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=50, blank=True, null=True)
    message = models.TextField()
    selected_fabric = models.CharField(max_length=100, blank=True, null=True)
    selected_color = models.CharField(max_length=100, blank=True, null=True)
    status = models.CharField(
        max_length=20, choices=EnquiryStatus.choices, default=EnquiryStatus.PENDING, db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "enquiries"

    def __str__(self):
        return f"Enquiry for {self.product_name} by {self.customer_name}"

    def to_domain(self):
        return domain.Enquiry(
            id=str(self.id),
            product_id=str(self.product_id) if self.product_id else None,
            product_name=self.product_name,
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            customer_phone=self.customer_phone,
            message=self.message,
            fabric=self.selected_fabric,
            color=self.selected_color,
            status=self.status,
            created_at=self.created_at,
        )
