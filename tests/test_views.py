import json
import uuid

import pytest
from django.urls import reverse

from catalog_app.exceptions import ChannelError
from catalog_app.models import Enquiry, Product

pytestmark = pytest.mark.django_db


def post_json(client, url, data, method="post"):
    return getattr(client, method)(url, data=json.dumps(data), content_type="application/json")


@pytest.fixture
def catalog(repo):
    sofa = repo.create_product({"name": "Chesterfield", "price": "1200", "category": "Sofas"})
    table = repo.create_product({
        "name": "Oak Side Table", "price": "100", "category": "Side Tables",
        "is_special": True, "special_price": "80",
    })
    corner = repo.create_product({
        "name": "Corner Sofa", "price": "2000", "category": "Sofas", "is_featured": True,
    })
    return {"sofa": sofa, "table": table, "corner": corner}


### Public catalog ###
def test_product_list_with_categories_and_pricing(client, catalog):
    res = client.get(reverse("product_list"))
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 3
    assert body["categories"][0] == "All"
    assert set(body["categories"]) == {"All", "Sofas", "Side Tables"}

    table = next(p for p in body["products"] if p["id"] == catalog["table"].id)
    assert table["price"] == "100.00"
    assert table["effective_price"] == "80.00"
    assert table["discount_percent"] == 20
    assert table["average_rating"] == 0
    assert table["review_count"] == 0
    assert table["stock"] == 0
    assert table["stock_status"] == "out-of-stock"


def test_product_list_filters(client, catalog):
    url = reverse("product_list")
    sofas = client.get(url, {"category": "Sofas"}).json()
    assert {p["name"] for p in sofas["products"]} == {"Chesterfield", "Corner Sofa"}
    assert set(sofas["categories"]) == {"All", "Sofas", "Side Tables"}

    sale = client.get(url, {"sale": "true"}).json()
    assert [p["name"] for p in sale["products"]] == ["Oak Side Table"]

    assert client.get(url, {"category": "Lamps"}).json()["count"] == 0
    assert client.get(url, {"q": "oak"}).json()["count"] == 1
    assert [p["name"] for p in client.get(url, {"featured": "1"}).json()["products"]] == ["Corner Sofa"]


def test_product_detail_and_reviews(client, catalog):
    sofa_id = catalog["sofa"].id
    url = reverse("product_reviews", args=[sofa_id])

    assert post_json(client, url, {"author": "Sam", "comment": "Comfy", "rating": 5}).status_code == 201
    assert post_json(client, url, {"author": "Lee", "rating": 4}).status_code == 201

    bad = post_json(client, url, {"author": "Lee", "rating": 9})
    assert bad.status_code == 400
    assert "rating" in bad.json()["errors"]

    detail = client.get(reverse("product_detail", args=[sofa_id])).json()
    assert detail["average_rating"] == 4.5
    assert detail["review_count"] == 2
    assert detail["rating_breakdown"]["5"] == 1
    assert {r["author"] for r in detail["reviews"]} == {"Sam", "Lee"}


def test_unknown_product_is_404(client, db):
    res = client.get(reverse("product_detail", args=[str(uuid.uuid4())]))
    assert res.status_code == 404


def test_malformed_json_is_400(client, catalog):
    res = client.post(
        reverse("product_reviews", args=[catalog["sofa"].id]),
        data="{not json", content_type="application/json",
    )
    assert res.status_code == 400
    assert "__all__" in res.json()["errors"]


def test_selection_guidance(client, repo, catalog):
    sofa_id = catalog["sofa"].id
    repo.add_variant_option(sofa_id, "fabric", {"name": "Velvet"})
    repo.add_variant_option(sofa_id, "color", {"name": "Teal", "color_code": "#008080"})
    url = reverse("product_selection", args=[sofa_id])

    body = post_json(client, url, {}).json()
    assert body == {
        "can_enquire": False,
        "block": "needs-both",
        "message": "Please select a fabric and a color",
        "unknown": {},
    }
    assert post_json(client, url, {"fabric": "Velvet"}).json()["block"] == "needs-color"
    assert post_json(client, url, {"fabric": "Velvet", "color": "Teal"}).json()["can_enquire"] is True


### Enquiries ###
def test_submit_enquiry(client, enquiry_settings, mailoutbox, repo, catalog):
    sofa_id = catalog["sofa"].id
    repo.add_variant_option(sofa_id, "fabric", {"name": "Velvet"})
    url = reverse("product_enquiry", args=[sofa_id])

    blocked = post_json(client, url, {"name": "Jo", "email": "jo@x.com", "message": "hi"})
    assert blocked.status_code == 400
    assert "fabric" in blocked.json()["errors"]
    assert mailoutbox == []

    res = post_json(client, url, {
        "name": "Jo", "email": "jo@x.com", "phone": "", "message": "hi", "fabric": "Velvet",
    })
    assert res.status_code == 201
    assert res.json()["status"] == "pending"

    enquiry = Enquiry.objects.get(pk=res.json()["id"])
    assert enquiry.selected_fabric == "Velvet"
    assert enquiry.selected_color is None
    assert enquiry.product_name == "Chesterfield"
    assert len(mailoutbox) == 1


def test_channel_failure_is_503_and_records_nothing(client, enquiry_settings, monkeypatch, catalog):
    class DownChannel:
        def send(self, draft):
            raise ChannelError("relay down")

    monkeypatch.setattr("catalog_app.views.get_enquiry_channel", lambda: DownChannel())

    res = post_json(client, reverse("product_enquiry", args=[catalog["table"].id]), {
        "name": "Jo", "email": "jo@x.com", "message": "hi",
    })
    assert res.status_code == 503
    assert "try again later" in res.json()["error"]
    assert Enquiry.objects.count() == 0


### Staff ###
def test_staff_endpoints_require_staff(client, catalog):
    res = post_json(client, reverse("manage_products"), {"name": "X", "price": "1", "category": "Y"})
    assert res.status_code == 302
    assert Product.objects.count() == 3


def test_staff_product_crud(staff_client, db):
    created = post_json(staff_client, reverse("manage_products"), {
        "name": "Bed Frame", "price": "5000", "category": "Bed Sets", "stock": 2,
    })
    assert created.status_code == 201
    product_id = created.json()["id"]
    url = reverse("manage_product", args=[product_id])

    updated = post_json(staff_client, url, {"is_special": True, "special_price": "4500"}, method="patch")
    assert updated.status_code == 200
    assert updated.json()["effective_price"] == "4500.00"
    assert updated.json()["discount_percent"] == 10

    rejected = post_json(staff_client, url, {"special_price": "5000"}, method="patch")
    assert rejected.status_code == 400
    assert "special_price" in rejected.json()["errors"]

    option = post_json(staff_client, reverse("manage_product_options", args=[product_id, "color"]), {
        "name": "Walnut", "color_code": "#5C4033",
    })
    assert option.status_code == 201
    assert option.json()["color_code"] == "#5C4033"

    bad_option = post_json(staff_client, reverse("manage_product_options", args=[product_id, "color"]), {
        "name": "Walnut", "color_code": "brown",
    })
    assert bad_option.status_code == 400

    removed = staff_client.delete(reverse("manage_option", args=[option.json()["id"]]))
    assert removed.status_code == 200

    assert staff_client.delete(url).status_code == 200
    assert staff_client.delete(url).status_code == 404


def test_staff_enquiry_status(staff_client, repo, catalog):
    from catalog_app.domain import EnquiryDraft

    table = catalog["table"]
    enquiry = repo.create_enquiry(EnquiryDraft(
        product_id=table.id, product_name=table.name,
        customer_name="Jo", customer_email="jo@x.com", message="hi",
    ))

    listed = staff_client.get(reverse("manage_enquiries"), {"status": "pending"}).json()
    assert listed["count"] == 1
    assert listed["enquiries"][0]["next_statuses"] == ["responded", "completed"]

    url = reverse("manage_enquiry_status", args=[enquiry.id])
    done = post_json(staff_client, url, {"status": "completed"})
    assert done.status_code == 200
    assert done.json()["status"] == "completed"
    assert done.json()["next_statuses"] == []

    again = post_json(staff_client, url, {"status": "pending"})
    assert again.status_code == 409
    assert again.json()["current"] == "completed"

    unknown = post_json(staff_client, url, {"status": "archived"})
    assert unknown.status_code == 400

    missing = post_json(staff_client, reverse("manage_enquiry_status", args=[str(uuid.uuid4())]), {"status": "completed"})
    assert missing.status_code == 404


def test_sitemap_lists_products(client, catalog):
    res = client.get("/sitemap.xml")
    assert res.status_code == 200
    assert catalog["sofa"].id in res.content.decode()


def test_sitemap_uses_site_base_url(client, settings, catalog):
    settings.SITE_BASE_URL = "https://www.example-furniture.co.za"
    body = client.get("/sitemap.xml").content.decode()
    assert "<loc>https://www.example-furniture.co.za/about</loc>" in body
    assert f"https://www.example-furniture.co.za/api/products/{catalog['sofa'].id}/" in body
    assert "testserver" not in body


def test_sitemap_falls_back_to_request_host(client, settings, catalog):
    settings.SITE_BASE_URL = ""
    body = client.get("/sitemap.xml").content.decode()
    assert "<loc>http://testserver/about</loc>" in body
