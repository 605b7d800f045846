from decimal import Decimal

import pytest
from cart.services import add_item
from catalog.tests.factories import ProductFactory
from customer.tests.factories import AddressFactory
from orders.models import IdempotencyKey, Order
from orders.tests.factories import OrderFactory, OrderItemFactory
from rest_framework.test import APIClient
from users.tests.factories import StaffUserFactory, UserFactory

pytestmark = pytest.mark.django_db


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def client(user):
    api = APIClient()
    api.force_authenticate(user=user)
    return api


def _fill_cart(user, price="120.00", quantity=2, inventory=10):
    product = ProductFactory(price=Decimal(price), inventory=inventory)
    add_item(user=user, product_id=product.id, quantity=quantity)
    return product


def test_place_order(client, user):
    _fill_cart(user)
    address = AddressFactory(user=user)

    resp = client.post("/api/v1/orders/", {"address_id": address.id, "promo_code": "SAVE50"}, format="json")

    assert resp.status_code == 201
    body = resp.json()
    assert body["number"].startswith("ORD-")
    assert body["subtotal"] == "240.00"
    assert body["discount"] == "12.00"
    assert body["delivery_fee"] == "50.00"
    assert body["total_amount"] == "278.00"
    assert len(body["items"]) == 1
    assert client.get("/api/v1/cart/count/").json() == {"count": 0}


def test_place_order_errors(client, user):
    address = AddressFactory(user=user)
    resp = client.post("/api/v1/orders/", {"address_id": address.id}, format="json")
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Cart is empty or not found", "code": "empty_cart"}

    _fill_cart(user, quantity=5, inventory=2)
    resp = client.post("/api/v1/orders/", {"address_id": address.id}, format="json")
    assert resp.status_code == 400
    assert resp.json()["code"] == "insufficient_inventory"

    resp = client.post("/api/v1/orders/", {"address_id": AddressFactory().id}, format="json")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Address not found"


def test_idempotent_order_creation(client, user):
    _fill_cart(user)
    address = AddressFactory(user=user)
    payload = {"address_id": address.id}

    r1 = client.post("/api/v1/orders/", payload, format="json", HTTP_IDEMPOTENCY_KEY="checkout-1")
    r2 = client.post("/api/v1/orders/", payload, format="json", HTTP_IDEMPOTENCY_KEY="checkout-1")

    assert r1.status_code == r2.status_code == 201
    assert r1.json()["id"] == r2.json()["id"]
    assert Order.objects.filter(user=user).count() == 1

    changed = {"address_id": address.id, "promo_code": "FIRST10"}
    r3 = client.post("/api/v1/orders/", changed, format="json", HTTP_IDEMPOTENCY_KEY="checkout-1")
    assert r3.status_code == 409


def test_failed_idempotent_request_releases_key(client, user):
    address = AddressFactory(user=user)

    r1 = client.post("/api/v1/orders/", {"address_id": address.id}, format="json", HTTP_IDEMPOTENCY_KEY="k-2")
    assert r1.status_code == 400
    assert not IdempotencyKey.objects.filter(key="k-2").exists()

    _fill_cart(user)
    r2 = client.post("/api/v1/orders/", {"address_id": address.id}, format="json", HTTP_IDEMPOTENCY_KEY="k-2")
    assert r2.status_code == 201


def test_list_detail_and_stats_are_scoped(client, user):
    mine = OrderItemFactory(order=OrderFactory(user=user)).order
    other = OrderFactory()

    body = client.get("/api/v1/orders/").json()
    assert [row["id"] for row in body["results"]] == [mine.id]
    assert body["results"][0]["item_count"] == 1

    assert client.get(f"/api/v1/orders/{mine.id}/").status_code == 200
    assert client.get(f"/api/v1/orders/{other.id}/").status_code == 404

    stats = client.get("/api/v1/orders/stats/").json()
    assert stats["total_orders"] == 1
    assert stats["total_spent"] == "250.00"


def test_cancel_endpoint(client, user):
    order = OrderFactory(user=user)
    resp = client.post(f"/api/v1/orders/{order.id}/cancel/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"

    resp = client.post(f"/api/v1/orders/{order.id}/cancel/")
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_state"


def test_reorder_endpoint(client, user):
    order = OrderItemFactory(order=OrderFactory(user=user), quantity=3).order

    resp = client.post(f"/api/v1/orders/{order.id}/reorder/")

    assert resp.status_code == 200
    assert resp.json() == {"added": 1, "skipped": []}
    assert client.get("/api/v1/cart/count/").json() == {"count": 3}


def test_status_endpoint_is_staff_only(client):
    order = OrderFactory()
    assert client.post(f"/api/v1/orders/{order.id}/status/", {"status": "processing"}).status_code == 403

    staff = APIClient()
    staff.force_authenticate(user=StaffUserFactory())
    resp = staff.post(f"/api/v1/orders/{order.id}/status/", {"status": "processing"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["status"] == "processing"

    resp = staff.post(f"/api/v1/orders/{order.id}/status/", {"status": "delivered"}, format="json")
    assert resp.status_code == 400
