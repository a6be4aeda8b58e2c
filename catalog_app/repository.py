"""Interface the catalog core needs from the backing store."""
from typing import List, Optional, Protocol, runtime_checkable

from .domain import Enquiry, EnquiryDraft, Product, Review


@runtime_checkable
class CatalogRepository(Protocol):
    """
    Every method is a single atomic write or a fresh read.

    Lookups by id raise NotFoundError; malformed data raises
    django.core.exceptions.ValidationError.
    """

    def list_products(self) -> List[Product]:
        """All products, newest first, with reviews and options nested."""
        ...

    def get_product(self, product_id: str) -> Product:
        ...

    def create_product(self, data: dict) -> Product:
        ...

    def update_product(self, product_id: str, data: dict) -> Product:
        """Merge ``data`` over the stored product."""
        ...

    def delete_product(self, product_id: str) -> None:
        ...

    def add_variant_option(self, product_id: str, kind: str, data: dict):
        """``kind`` is one of fabric / color / size."""
        ...

    def remove_variant_option(self, option_id: str) -> None:
        ...

    def create_review(
        self, product_id: str, author: str, comment: Optional[str], rating: int
    ) -> Review:
        ...

    def list_enquiries(self, status: Optional[str] = None) -> List[Enquiry]:
        ...

    def get_enquiry(self, enquiry_id: str) -> Enquiry:
        ...

    def create_enquiry(self, draft: EnquiryDraft) -> Enquiry:
        ...

    def update_enquiry_status(self, enquiry_id: str, status: str) -> Enquiry:
        ...
