from urllib.parse import urlsplit

from django.conf import settings
from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from .models import Product

# storefront pages served by the frontend
STATIC_PAGES = ["/", "/products", "/about", "/services", "/contact"]


class SiteBaseUrlMixin:
    """Build absolute URLs from SITE_BASE_URL, falling back to the request's host."""

    def get_protocol(self, protocol=None):
        return urlsplit(settings.SITE_BASE_URL).scheme or super().get_protocol(protocol)

    def get_domain(self, site=None):
        return urlsplit(settings.SITE_BASE_URL).netloc or super().get_domain(site)


class StaticPageSitemap(SiteBaseUrlMixin, Sitemap):
    changefreq = "weekly"

    def items(self):
        return STATIC_PAGES

    def location(self, item):
        return item

    def priority(self, item):
        return 1.0 if item == "/" else 0.8


class ProductSitemap(SiteBaseUrlMixin, Sitemap):
    changefreq = "weekly"
    priority = 0.6

    def items(self):
        return Product.objects.order_by("name")

    def location(self, obj):
        return reverse("product_detail", args=[str(obj.pk)])

    def lastmod(self, obj):
        return obj.created_at


sitemaps = {
    "pages": StaticPageSitemap,
    "products": ProductSitemap,
}
