import pytest
from catalog.tests.factories import ProductFactory
from common.exceptions import InsufficientInventoryError, ValidationError
from inventory.models import StockMovement
from inventory.services import apply_movement, decrement_stock, ensure_available, restock


@pytest.mark.django_db
def test_signed_movement_inbound_and_outbound():
    product = ProductFactory(inventory=10)

    apply_movement(product_id=product.id, quantity=5, reason="restock")
    product.refresh_from_db()
    assert product.inventory == 15

    apply_movement(product_id=product.id, quantity=-3, reason="adjust")
    product.refresh_from_db()
    assert product.inventory == 12

    with pytest.raises(InsufficientInventoryError):
        apply_movement(product_id=product.id, quantity=-20, reason="adjust")
    product.refresh_from_db()
    assert product.inventory == 12
    assert StockMovement.objects.filter(product=product).count() == 2


@pytest.mark.django_db
def test_decrement_stock_records_order_movement():
    product = ProductFactory(inventory=4)

    movement = decrement_stock(product=product, quantity=4, reference="order:ORD-000001")

    product.refresh_from_db()
    assert product.inventory == 0
    assert movement.quantity == -4
    assert movement.reason == "order"
    assert movement.reference == "order:ORD-000001"


@pytest.mark.django_db
def test_decrement_stock_refuses_to_go_negative():
    product = ProductFactory(name="Basmati Rice", inventory=2)

    with pytest.raises(InsufficientInventoryError) as exc:
        decrement_stock(product=product, quantity=3)

    assert "Basmati Rice" in exc.value.detail
    product.refresh_from_db()
    assert product.inventory == 2
    assert not StockMovement.objects.exists()


@pytest.mark.django_db
def test_ensure_available_uses_current_count():
    product = ProductFactory(inventory=1)
    ensure_available(product=product, quantity=1)
    with pytest.raises(InsufficientInventoryError):
        ensure_available(product=product, quantity=2)


@pytest.mark.django_db
def test_restock_rejects_non_positive_and_unknown_reason():
    product = ProductFactory(inventory=1)
    with pytest.raises(ValidationError):
        restock(product_id=product.id, quantity=0)
    with pytest.raises(ValidationError):
        apply_movement(product_id=product.id, quantity=1, reason="gift")
