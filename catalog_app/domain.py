"""
In-memory catalog values.

The ORM models convert themselves to these with ``to_domain()``; everything in
ratings / pricing / variants / filters / enquiries only ever sees these.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from django.db import models


class EnquiryStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    RESPONDED = "responded", "Responded"
    COMPLETED = "completed", "Completed"


class OptionKind(models.TextChoices):
    FABRIC = "fabric", "Fabric"
    COLOR = "color", "Color"
    SIZE = "size", "Size"


@dataclass(frozen=True)
class Review:
    id: str
    author: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class FabricOption:
    id: str
    name: str
    image: Optional[str] = None
    kind: str = OptionKind.FABRIC


@dataclass(frozen=True)
class ColorOption:
    id: str
    name: str
    color_code: str
    kind: str = OptionKind.COLOR


@dataclass(frozen=True)
class SizeOption:
    id: str
    name: str
    kind: str = OptionKind.SIZE


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: Decimal
    category: str
    description: Optional[str] = None
    stock: int = 0
    images: Tuple[str, ...] = ()
    is_special: bool = False
    special_price: Optional[Decimal] = None
    is_featured: bool = False
    created_at: Optional[datetime] = None
    reviews: Tuple[Review, ...] = ()
    fabrics: Tuple[FabricOption, ...] = ()
    colors: Tuple[ColorOption, ...] = ()
    sizes: Tuple[SizeOption, ...] = ()


@dataclass(frozen=True)
class VariantSelection:
    """Options picked for a single enquiry attempt. Never persisted on its own."""
    fabric: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None


@dataclass(frozen=True)
class EnquiryForm:
    name: str = ""
    email: str = ""
    message: str = ""
    phone: Optional[str] = None


@dataclass(frozen=True)
class EnquiryDraft:
    product_id: str
    product_name: str
    customer_name: str
    customer_email: str
    message: str
    customer_phone: Optional[str] = None
    fabric: Optional[str] = None
    color: Optional[str] = None

    def as_dict(self):
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "message": self.message,
            "fabric": self.fabric,
            "color": self.color,
        }


@dataclass(frozen=True)
class Enquiry:
    id: str
    product_id: Optional[str]
    product_name: str
    customer_name: str
    customer_email: str
    message: str
    status: str = EnquiryStatus.PENDING
    customer_phone: Optional[str] = None
    fabric: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ContactMessage:
    """A general message from the contact page, not tied to a product."""
    name: str
    email: str
    subject: str
    message: str

    def as_dict(self):
        return {
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
        }
