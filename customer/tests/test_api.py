import pytest
from customer.models import Address, Profile
from customer.tests.factories import AddressFactory
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

pytestmark = pytest.mark.django_db


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user():
    User = get_user_model()
    return User.objects.create_user(
        username="alice", email="alice@example.com", password="pass1234", phone="+919812345678"
    )


@pytest.fixture
def auth_client(api_client, user):
    access = AccessToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    return api_client


def test_profile_created_on_first_get(auth_client, user):
    resp = auth_client.get("/api/v1/customer/profile/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == Profile.objects.get(user=user).id
    assert data["phone"] == "+919812345678"


def test_profile_patch_updates_details(auth_client, user):
    resp = auth_client.patch(
        "/api/v1/customer/profile/", {"full_name": "Alice Rao", "bio": "Loves mangoes"}, format="json"
    )
    assert resp.status_code == 200
    profile = Profile.objects.get(user=user)
    assert profile.full_name == "Alice Rao"
    assert profile.bio == "Loves mangoes"


def test_addresses_list_scoped_to_user(auth_client, user):
    AddressFactory(user=user)
    AddressFactory(user=user, is_default=True)
    AddressFactory()

    resp = auth_client.get("/api/v1/customer/addresses/")
    assert resp.status_code == 200
    results = resp.json()
    assert len(results) == 2
    assert results[0]["is_default"] is True


def test_address_crud_flow(auth_client, user):
    create = auth_client.post(
        "/api/v1/customer/addresses/",
        {
            "label": "Home",
            "address_line1": "12 MG Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "zip_code": "560001",
            "geolocation": {"lat": "12.9716", "lng": "77.5946"},
        },
        format="json",
    )
    assert create.status_code == 201
    body = create.json()
    addr_id = body["id"]
    assert body["is_default"] is True
    assert body["country"] == "India"
    assert body["geolocation"] == {"lat": 12.9716, "lng": 77.5946}

    patch = auth_client.patch(f"/api/v1/customer/addresses/{addr_id}/", {"label": "Flat"}, format="json")
    assert patch.status_code == 200
    assert patch.json()["label"] == "Flat"

    delete = auth_client.delete(f"/api/v1/customer/addresses/{addr_id}/")
    assert delete.status_code == 204
    assert auth_client.get(f"/api/v1/customer/addresses/{addr_id}/").status_code == 404


def test_other_users_address_is_not_found(auth_client):
    foreign = AddressFactory()
    assert auth_client.get(f"/api/v1/customer/addresses/{foreign.id}/").status_code == 404
    assert auth_client.post(f"/api/v1/customer/addresses/{foreign.id}/set-default/").status_code == 404


def test_set_default_and_get_default(auth_client, user):
    first = AddressFactory(user=user, is_default=True)
    second = AddressFactory(user=user)

    resp = auth_client.post(f"/api/v1/customer/addresses/{second.id}/set-default/")
    assert resp.status_code == 200
    assert resp.json()["is_default"] is True
    first.refresh_from_db()
    assert first.is_default is False

    default = auth_client.get("/api/v1/customer/addresses/default/")
    assert default.status_code == 200
    assert default.json()["id"] == second.id


def test_default_address_missing_returns_404(auth_client):
    assert auth_client.get("/api/v1/customer/addresses/default/").status_code == 404


def test_requires_authentication(api_client):
    assert api_client.get("/api/v1/customer/addresses/").status_code == 401
    assert Address.objects.count() == 0
