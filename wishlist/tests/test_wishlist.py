import pytest
from catalog.tests.factories import ProductFactory
from common.exceptions import NotFoundError
from rest_framework.test import APIClient
from users.tests.factories import UserFactory
from wishlist.models import WishlistItem
from wishlist.selectors import is_in_wishlist, wishlist_count
from wishlist.services import add_to_wishlist, clear_wishlist, toggle_wishlist

pytestmark = pytest.mark.django_db


def test_add_is_idempotent():
    user = UserFactory()
    product = ProductFactory()

    first = add_to_wishlist(user=user, product_id=product.id)
    second = add_to_wishlist(user=user, product_id=product.id)

    assert first.id == second.id
    assert wishlist_count(user=user) == 1


def test_toggle_twice_restores_state():
    user = UserFactory()
    product = ProductFactory()

    assert toggle_wishlist(user=user, product_id=product.id) is True
    assert is_in_wishlist(user=user, product_id=product.id)
    assert toggle_wishlist(user=user, product_id=product.id) is False
    assert not is_in_wishlist(user=user, product_id=product.id)


def test_inactive_product_cannot_be_added():
    with pytest.raises(NotFoundError):
        add_to_wishlist(user=UserFactory(), product_id=ProductFactory(is_active=False).id)


def test_clear_only_touches_own_items():
    user = UserFactory()
    for product in ProductFactory.create_batch(2):
        add_to_wishlist(user=user, product_id=product.id)
    add_to_wishlist(user=UserFactory(), product_id=ProductFactory().id)

    assert clear_wishlist(user=user) == 2
    assert WishlistItem.objects.count() == 1


def test_wishlist_api_flow():
    client = APIClient()
    client.force_authenticate(user=UserFactory())
    product = ProductFactory(name="Cold Pressed Oil")

    resp = client.post("/api/v1/wishlist/", {"product_id": product.id}, format="json")
    assert resp.status_code == 201
    assert resp.json()["product"]["name"] == "Cold Pressed Oil"

    body = client.get("/api/v1/wishlist/").json()
    assert [row["product"]["id"] for row in body["results"]] == [product.id]
    assert client.get("/api/v1/wishlist/count/").json() == {"count": 1}
    assert client.get(f"/api/v1/wishlist/{product.id}/contains/").json()["in_wishlist"] is True

    resp = client.post("/api/v1/wishlist/toggle/", {"product_id": product.id}, format="json")
    assert resp.json() == {"product_id": product.id, "in_wishlist": False}

    assert client.delete(f"/api/v1/wishlist/{product.id}/").status_code == 404
    client.post("/api/v1/wishlist/toggle/", {"product_id": product.id}, format="json")
    assert client.delete(f"/api/v1/wishlist/{product.id}/").status_code == 204
    assert client.post("/api/v1/wishlist/clear/").json() == {"deleted": 0}


def test_wishlist_requires_auth():
    assert APIClient().get("/api/v1/wishlist/").status_code == 401
