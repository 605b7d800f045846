from decimal import Decimal

import pytest
from catalog.tests.factories import ProductFactory
from common.exceptions import (
    EmptyCartError,
    InsufficientInventoryError,
    NotFoundError,
    UpstreamError,
    api_exception_handler,
)
from common.money import round_rating, to_money
from django.db import OperationalError
from rest_framework.exceptions import NotAuthenticated


@pytest.mark.parametrize(
    "exc,status_code,body",
    [
        (NotFoundError("Product not found"), 404, {"detail": "Product not found", "code": "not_found"}),
        (EmptyCartError(), 400, {"detail": "Cart is empty or not found", "code": "empty_cart"}),
        (UpstreamError(), 502, {"detail": "Upstream data store failure.", "code": "upstream"}),
    ],
)
def test_storefront_errors_render_detail_and_code(exc, status_code, body):
    resp = api_exception_handler(exc, {})
    assert resp.status_code == status_code
    assert resp.data == body


@pytest.mark.django_db
def test_insufficient_inventory_names_the_product():
    product = ProductFactory(name="Curd 400g")
    exc = InsufficientInventoryError(product)
    assert exc.detail == "Insufficient inventory for Curd 400g"
    assert api_exception_handler(exc, {}).data["code"] == "insufficient_inventory"


def test_database_errors_become_upstream_errors(caplog):
    resp = api_exception_handler(OperationalError("database is locked"), {})
    assert resp.status_code == 502
    assert resp.data["code"] == "upstream"
    assert any(r.getMessage() == "api.database_error" for r in caplog.records)


def test_drf_errors_use_the_default_handler():
    resp = api_exception_handler(NotAuthenticated(), {})
    assert resp.status_code == 401
    assert "code" not in resp.data


def test_money_helpers_round_half_up():
    assert to_money("10.005") == Decimal("10.01")
    assert to_money(None) == Decimal("0.00")
    assert round_rating(3.75) == 3.8
    assert round_rating(None) is None


@pytest.mark.django_db
def test_health_reports_database_ok(client):
    resp = client.get("/health/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok"}
