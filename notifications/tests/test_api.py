import pytest
from notifications.models import Notification
from notifications.tests.factories import NotificationFactory
from rest_framework.test import APIClient
from users.tests.factories import UserFactory

pytestmark = pytest.mark.django_db


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def client(user):
    api = APIClient()
    api.force_authenticate(user=user)
    return api


def test_requires_auth():
    assert APIClient().get("/api/v1/notifications/").status_code == 401


def test_list_is_scoped_and_filterable(client, user):
    own = NotificationFactory(user=user, type="order_update")
    NotificationFactory(user=user, type="promotion", read=True)
    NotificationFactory()

    body = client.get("/api/v1/notifications/").json()
    assert body["count"] == 2

    body = client.get("/api/v1/notifications/?type=order_update").json()
    assert [row["id"] for row in body["results"]] == [own.id]

    body = client.get("/api/v1/notifications/?read=false").json()
    assert [row["id"] for row in body["results"]] == [own.id]


def test_read_flow(client, user):
    first, second = NotificationFactory.create_batch(2, user=user)

    assert client.get("/api/v1/notifications/unread-count/").json() == {"count": 2}

    resp = client.post(f"/api/v1/notifications/{first.id}/read/")
    assert resp.status_code == 200
    assert resp.json()["read"] is True
    assert client.get("/api/v1/notifications/unread-count/").json() == {"count": 1}

    assert client.post("/api/v1/notifications/read-all/").json() == {"updated": 1}
    assert client.get("/api/v1/notifications/unread-count/").json() == {"count": 0}


def test_delete_own_only(client, user):
    mine = NotificationFactory(user=user)
    other = NotificationFactory()

    assert client.delete(f"/api/v1/notifications/{other.id}/").status_code == 404
    assert client.delete(f"/api/v1/notifications/{mine.id}/").status_code == 204
    assert not Notification.objects.filter(id=mine.id).exists()
    assert Notification.objects.filter(id=other.id).exists()
