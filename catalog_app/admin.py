from django.contrib import admin

from .enquiries import next_statuses
from .models import Enquiry, Product, ProductColor, ProductFabric, ProductSize, Review
from .pricing import discount_percent, effective_price
from .ratings import average_rating


class ProductFabricInline(admin.TabularInline):
    model = ProductFabric
    extra = 0


class ProductColorInline(admin.TabularInline):
    model = ProductColor
    extra = 0


class ProductSizeInline(admin.TabularInline):
    model = ProductSize
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "display_price", "discount", "stock", "is_special", "is_featured", "rating")
    list_filter = ("category", "is_special", "is_featured")
    search_fields = ("name", "description", "category")
    inlines = [ProductFabricInline, ProductColorInline, ProductSizeInline]

    def get_queryset(self, request):
        return super().get_queryset(request).prefetch_related("reviews", "fabrics", "colors", "sizes")

    @admin.display(description="Effective price")
    def display_price(self, obj):
        return effective_price(obj)

    @admin.display(description="Discount %")
    def discount(self, obj):
        return discount_percent(obj)

    @admin.display(description="Rating")
    def rating(self, obj):
        return f"{average_rating(obj.reviews.all()):.1f}"


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "author", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("author", "comment", "product__name")


def _move_enquiries(queryset, status):
    moved = 0
    for enquiry in queryset:
        if status in next_statuses(enquiry.status):
            enquiry.status = status
            enquiry.save(update_fields=["status"])
            moved += 1
    return moved


@admin.register(Enquiry)
class EnquiryAdmin(admin.ModelAdmin):
    list_display = ("product_name", "customer_name", "customer_email", "selected_fabric", "selected_color", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("product_name", "customer_name", "customer_email")
    readonly_fields = ("status", "created_at")
    actions = ["mark_responded", "mark_completed"]

    @admin.action(description="Mark selected pending enquiries as responded")
    def mark_responded(self, request, queryset):
        moved = _move_enquiries(queryset, "responded")
        self.message_user(request, f"{moved} enquiry(ies) marked as responded.")

    @admin.action(description="Mark selected pending enquiries as completed")
    def mark_completed(self, request, queryset):
        moved = _move_enquiries(queryset, "completed")
        self.message_user(request, f"{moved} enquiry(ies) marked as completed.")
