from decimal import Decimal

import pytest
from cart.services import add_item
from catalog.tests.factories import CategoryFactory, ProductFactory
from customer.tests.factories import AddressFactory
from notifications.models import Notification
from orders.models import Order
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken
from users.tests.factories import StaffUserFactory, UserFactory

pytestmark = pytest.mark.django_db


def _bearer(user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
    return client


class TestCreateOrder:
    url = "/functions/v1/create-order"

    def test_requires_token(self):
        resp = APIClient().post(self.url, {"address_id": 1}, format="json")
        assert resp.status_code == 401
        assert set(resp.json()) == {"error"}

    def test_invalid_token(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
        resp = client.post(self.url, {"address_id": 1}, format="json")
        assert resp.status_code == 401
        assert "error" in resp.json()

    def test_creates_order(self):
        user = UserFactory()
        address = AddressFactory(user=user)
        product = ProductFactory(price=Decimal("250.00"), inventory=4)
        add_item(user=user, product_id=product.id, quantity=2)

        resp = _bearer(user).post(self.url, {"address_id": address.id, "promo_code": "FIRST10"}, format="json")

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Order created successfully"
        assert body["order"]["total_amount"] == "450.00"
        assert body["order"]["items"][0]["quantity"] == 2
        product.refresh_from_db()
        assert product.inventory == 2

    def test_domain_failures_are_400_with_error(self):
        user = UserFactory()
        address = AddressFactory(user=user)

        resp = _bearer(user).post(self.url, {"address_id": address.id}, format="json")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Cart is empty or not found"}

        add_item(user=user, product_id=ProductFactory().id, quantity=1)
        resp = _bearer(user).post(self.url, {"address_id": AddressFactory().id}, format="json")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Address not found"}

        resp = _bearer(user).post(self.url, {}, format="json")
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("address_id:")

    def test_idempotency_key_replays(self):
        user = UserFactory()
        address = AddressFactory(user=user)
        add_item(user=user, product_id=ProductFactory().id, quantity=1)
        client = _bearer(user)

        r1 = client.post(self.url, {"address_id": address.id}, format="json", HTTP_IDEMPOTENCY_KEY="fn-1")
        r2 = client.post(self.url, {"address_id": address.id}, format="json", HTTP_IDEMPOTENCY_KEY="fn-1")

        assert r1.status_code == r2.status_code == 200
        assert r1.json()["order"]["id"] == r2.json()["order"]["id"]
        assert Order.objects.count() == 1


class TestSearchProducts:
    url = "/functions/v1/search-products"

    def test_ranks_by_relevance(self):
        ProductFactory(name="Green Tea", description="Loose leaf")
        desc_only = ProductFactory(name="Kettle", description="Perfect for tea lovers")
        prefix = ProductFactory(name="Tea Biscuits", description="Crunchy")
        ProductFactory(name="Coffee", description="Arabica")

        resp = APIClient().post(self.url, {"query": "tea"}, format="json")

        assert resp.status_code == 200
        products = resp.json()["products"]
        assert [p["relevance_score"] for p in products] == [15, 10, 3]
        assert products[0]["id"] == prefix.id
        assert products[-1]["id"] == desc_only.id
        assert {"average_rating", "review_count", "category"} <= set(products[0])
        assert products[0]["average_rating"] == 0

    def test_filters_limit_and_offset(self):
        category = CategoryFactory()
        for price in ("10.00", "20.00", "30.00"):
            ProductFactory(name=f"Rice {price}", category=category, price=Decimal(price))
        ProductFactory(name="Rice elsewhere", price=Decimal("20.00"))

        resp = APIClient().post(
            self.url,
            {"query": "rice", "category_id": category.id, "min_price": "15", "limit": 1, "offset": 1},
            format="json",
        )

        products = resp.json()["products"]
        assert len(products) == 1
        assert products[0]["name"] == "Rice 20.00"

    def test_empty_query_returns_newest_with_zero_score(self):
        older = ProductFactory()
        newer = ProductFactory()

        products = APIClient().post(self.url, {}, format="json").json()["products"]

        assert [p["id"] for p in products] == [newer.id, older.id]
        assert {p["relevance_score"] for p in products} == {0}

    def test_bad_limit_is_400(self):
        resp = APIClient().post(self.url, {"limit": 0}, format="json")
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("limit:")


class TestSendNotification:
    url = "/functions/v1/send-notification"

    def test_staff_only(self):
        target = UserFactory()
        payload = {"user_id": target.id, "type": "promotion", "title": "Hi", "message": "Sale"}

        assert APIClient().post(self.url, payload, format="json").status_code == 401
        resp = _bearer(UserFactory()).post(self.url, payload, format="json")
        assert resp.status_code == 403
        assert "error" in resp.json()

    def test_sends(self):
        target = UserFactory(phone="+919811112222")
        payload = {
            "user_id": target.id,
            "type": "delivery",
            "title": "Arriving soon",
            "message": "Your rider is 5 minutes away",
            "metadata": {"order_id": 7},
            "send_email": True,
            "send_sms": True,
        }

        resp = _bearer(StaffUserFactory()).post(self.url, payload, format="json")

        assert resp.status_code == 200
        body = resp.json()
        assert body["email_sent"] is True
        assert body["sms_sent"] is True
        assert body["notification"]["metadata"] == {"order_id": 7}
        assert Notification.objects.get(user=target).title == "Arriving soon"

    def test_unknown_user(self):
        payload = {"user_id": 999999, "type": "system", "title": "x", "message": "y"}
        resp = _bearer(StaffUserFactory()).post(self.url, payload, format="json")
        assert resp.status_code == 400
        assert resp.json() == {"error": "User not found"}
