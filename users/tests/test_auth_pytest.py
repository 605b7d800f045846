import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient


@pytest.fixture
def shopper(db):
    return get_user_model().objects.create_user(
        username="jdoe",
        email="JDoe@Example.com",
        phone="+919812345678",
        password="StrongPass123!",
    )


@pytest.mark.django_db
def test_email_is_normalized_on_save(shopper):
    assert shopper.email == "jdoe@example.com"


@pytest.mark.django_db
def test_signin_with_email_and_profile(shopper):
    client = APIClient()

    resp = client.post(
        "/api/v1/auth/signin/",
        {"identifier": "JDOE@example.com", "password": "StrongPass123!"},
        format="json",
    )
    assert resp.status_code == 200
    access = resp.data["access"]

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    profile = client.get("/api/v1/account/profile/")
    assert profile.status_code == 200
    assert profile.data["email"] == "jdoe@example.com"
    assert profile.data["phone"] == "+919812345678"


@pytest.mark.django_db
def test_signin_with_phone(shopper):
    resp = APIClient().post(
        "/api/v1/auth/signin/",
        {"identifier": "+919812345678", "password": "StrongPass123!"},
        format="json",
    )
    assert resp.status_code == 200
    assert "refresh" in resp.data


@pytest.mark.django_db
def test_signin_rejects_wrong_password(shopper):
    resp = APIClient().post(
        "/api/v1/auth/signin/",
        {"identifier": "jdoe@example.com", "password": "nope"},
        format="json",
    )
    assert resp.status_code == 400


@pytest.mark.django_db
def test_profile_requires_auth():
    assert APIClient().get("/api/v1/account/profile/").status_code == 401


@pytest.mark.django_db
def test_register_then_signout_blacklists_refresh():
    client = APIClient()
    reg = client.post(
        "/api/v1/account/register/",
        {"username": "newbie", "email": "newbie@example.com", "password": "Sup3rSecret!x"},
        format="json",
    )
    assert reg.status_code == 201
    assert reg.data["email"] == "newbie@example.com"

    tokens = client.post(
        "/api/v1/auth/signin/",
        {"identifier": "newbie@example.com", "password": "Sup3rSecret!x"},
        format="json",
    ).data
    out = client.post("/api/v1/auth/signout/", {"refresh": tokens["refresh"]}, format="json")
    assert out.status_code == 205

    again = client.post("/api/v1/auth/refresh/", {"refresh": tokens["refresh"]}, format="json")
    assert again.status_code == 401


@pytest.mark.django_db
def test_register_rejects_duplicate_email(shopper):
    resp = APIClient().post(
        "/api/v1/account/register/",
        {"username": "other", "email": "jdoe@example.com", "password": "Sup3rSecret!x"},
        format="json",
    )
    assert resp.status_code == 400
    assert "email" in resp.data
