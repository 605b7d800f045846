import pytest
from catalog.tests.factories import ProductFactory
from inventory.models import StockMovement
from inventory.services import apply_movement
from rest_framework.test import APIClient
from users.tests.factories import StaffUserFactory, UserFactory

pytestmark = pytest.mark.django_db


@pytest.fixture
def staff_client():
    client = APIClient()
    client.force_authenticate(user=StaffUserFactory())
    return client


def test_movements_require_staff():
    client = APIClient()
    assert client.get("/api/v1/inventory/movements/").status_code == 401

    client.force_authenticate(user=UserFactory())
    assert client.get("/api/v1/inventory/movements/").status_code == 403


def test_movements_list_filters(staff_client):
    product = ProductFactory(inventory=10)
    m_in = apply_movement(product_id=product.id, quantity=5, reason="restock", reference="PO-1")
    m_adj = apply_movement(product_id=product.id, quantity=-2, reason="adjust")

    resp_all = staff_client.get("/api/v1/inventory/movements/")
    assert resp_all.status_code == 200
    all_ids = {row["id"] for row in resp_all.json()["results"]}
    assert {m_in.id, m_adj.id} <= all_ids

    resp_in = staff_client.get("/api/v1/inventory/movements/?reason=restock")
    in_ids = {row["id"] for row in resp_in.json()["results"]}
    assert m_in.id in in_ids and m_adj.id not in in_ids

    resp_ref = staff_client.get("/api/v1/inventory/movements/?reference=PO-1")
    assert [row["id"] for row in resp_ref.json()["results"]] == [m_in.id]


def test_restock_via_api(staff_client):
    product = ProductFactory(inventory=3)

    resp = staff_client.post(
        "/api/v1/inventory/movements/",
        {"product_id": product.id, "quantity": 12, "reason": "restock", "reference": "PO-9"},
        format="json",
    )

    assert resp.status_code == 201
    assert resp.json()["quantity"] == 12
    product.refresh_from_db()
    assert product.inventory == 15
    assert StockMovement.objects.get(reference="PO-9").reason == "restock"


def test_adjustment_below_zero_is_rejected(staff_client):
    product = ProductFactory(inventory=1)

    resp = staff_client.post(
        "/api/v1/inventory/movements/",
        {"product_id": product.id, "quantity": -5, "reason": "adjust"},
        format="json",
    )

    assert resp.status_code == 400
    assert resp.json()["code"] == "insufficient_inventory"


def test_unknown_product_is_404(staff_client):
    resp = staff_client.post("/api/v1/inventory/movements/", {"product_id": 999999, "quantity": 1}, format="json")
    assert resp.status_code == 404


def test_low_stock_report(staff_client):
    scarce = ProductFactory(inventory=1)
    ProductFactory(inventory=40)
    ProductFactory(inventory=0, is_active=False)

    resp = staff_client.get("/api/v1/inventory/low-stock/?threshold=2")

    assert resp.status_code == 200
    assert [row["id"] for row in resp.json()] == [scarce.id]
