from decimal import Decimal

import pytest

from catalog_app.domain import ColorOption, FabricOption, Product, Review, SizeOption
from catalog_app.stores import DjangoCatalogRepository


def make_product(**kwargs):
    defaults = {
        "id": "p1",
        "name": "Linen Sofa",
        "price": Decimal("100"),
        "category": "Sofas",
    }
    defaults.update(kwargs)
    for key in ("price", "special_price"):
        if defaults.get(key) is not None:
            defaults[key] = Decimal(str(defaults[key]))
    for key in ("reviews", "fabrics", "colors", "sizes", "images"):
        if key in defaults:
            defaults[key] = tuple(defaults[key])
    return Product(**defaults)


def fabrics(*names):
    return [FabricOption(id=f"f{i}", name=n) for i, n in enumerate(names)]


def colors(*names):
    return [ColorOption(id=f"c{i}", name=n, color_code="#A0B0C0") for i, n in enumerate(names)]


def sizes(*names):
    return [SizeOption(id=f"s{i}", name=n) for i, n in enumerate(names)]


def reviews(*ratings):
    return [Review(id=f"r{i}", author="Sam", rating=r) for i, r in enumerate(ratings)]


@pytest.fixture
def repo():
    return DjangoCatalogRepository()


@pytest.fixture
def sofa(repo, db):
    return repo.create_product({
        "name": "Chesterfield Sofa",
        "description": "Hand-tufted three seater",
        "price": "1200.00",
        "category": "Sofas",
        "stock": 3,
        "images": ["https://img.example.com/chesterfield.jpg"],
    })


@pytest.fixture
def staff_client(client, django_user_model):
    user = django_user_model.objects.create_user(
        username="admin", password="secret", is_staff=True
    )
    client.force_login(user)
    return client


@pytest.fixture
def enquiry_settings(settings):
    settings.ENQUIRY_CHANNEL = "email"
    settings.ENQUIRY_RECIPIENTS = ["sales@example.com"]
    settings.ENQUIRY_ATTACH_PDF = False
    settings.DEFAULT_FROM_EMAIL = "shop@example.com"
    return settings
